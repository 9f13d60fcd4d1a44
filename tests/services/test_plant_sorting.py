from plantshelf.schemas.plant import SortKey
from plantshelf.services.plant_sorting import LIGHT_ORDER, sort_plants


def _ids(plants):
    return [p.id for p in plants]


def test_light_order_runs_low_to_bright():
    assert LIGHT_ORDER == {"low": 0, "medium": 1, "bright": 2}


def test_no_sort_keeps_store_order(make_plant):
    plants = [make_plant(3, "C"), make_plant(1, "A"), make_plant(2, "B")]
    assert _ids(sort_plants(plants, None)) == [3, 1, 2]


def test_sort_returns_new_list(make_plant):
    plants = [make_plant(2, "B"), make_plant(1, "A")]
    result = sort_plants(plants, SortKey.NAME)
    assert result is not plants
    assert _ids(plants) == [2, 1]


def test_name_sort_is_case_insensitive(make_plant):
    plants = [make_plant(1, "hosta"), make_plant(2, "Astilbe"), make_plant(3, "Fern")]
    assert _ids(sort_plants(plants, SortKey.NAME)) == [2, 3, 1]


def test_name_ties_break_on_id(make_plant):
    plants = [make_plant(9, "Fern"), make_plant(4, "Fern"), make_plant(6, "Fern")]
    assert _ids(sort_plants(plants, SortKey.NAME)) == [4, 6, 9]


def test_light_sort_uses_level_rank(make_plant):
    plants = [
        make_plant(1, "Sunny", light_level="bright"),
        make_plant(2, "Shady", light_level="low"),
        make_plant(3, "Dappled", light_level="medium"),
        make_plant(4, "Shady Too", light_level="low"),
    ]
    assert _ids(sort_plants(plants, SortKey.LIGHT)) == [2, 4, 3, 1]


def test_zone_sort_uses_lowest_zone(make_plant):
    plants = [
        make_plant(1, "Warm", zones=("8", "9")),
        make_plant(2, "Hardy", zones=("7", "3b")),
        make_plant(3, "Middle", zones=("5a",)),
    ]
    assert _ids(sort_plants(plants, SortKey.ZONE)) == [2, 3, 1]


def test_zone_sort_puts_unzoned_plants_last(make_plant):
    plants = [
        make_plant(1, "Unknown"),
        make_plant(2, "Tropical", zones=("11",)),
        make_plant(3, "Also Unknown"),
        make_plant(4, "Hardy", zones=("2",)),
    ]
    assert _ids(sort_plants(plants, SortKey.ZONE)) == [4, 2, 1, 3]


def test_sorting_twice_is_stable(make_plant):
    plants = [make_plant(i, name) for i, name in enumerate(["b", "A", "a", "B"], start=1)]
    once = sort_plants(plants, SortKey.NAME)
    assert _ids(sort_plants(once, SortKey.NAME)) == _ids(once)
