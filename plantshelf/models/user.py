from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from plantshelf.db.base import Base


# Account stub: the catalog is public and no route authenticates yet.
class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)
    username: Mapped[str] = mapped_column(String(100), unique=True)
    hashed_password: Mapped[str] = mapped_column(String(255))
