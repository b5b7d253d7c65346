from models.city import City
from models.reference import Reference, is_loaded, ref_id


def test_reference_is_not_a_loaded_entity() -> None:
    city = City(zip_code="2000", city_name="Neuchâtel", id=1)
    reference = Reference(City, 1)

    assert reference != city
    assert not is_loaded(reference)
    assert is_loaded(city)
    assert not is_loaded(None)


def test_references_compare_by_type_and_id() -> None:
    assert Reference(City, 1) == Reference(City, 1)
    assert Reference(City, 1) != Reference(City, 2)
    assert len({Reference(City, 1), Reference(City, 1)}) == 1
    assert repr(Reference(City, 3)) == "Reference(City#3)"


def test_entities_compare_by_identity() -> None:
    first = City(zip_code="2000", city_name="Neuchâtel", id=1)
    copy = City(zip_code="2000", city_name="Neuchâtel", id=1)

    assert first != copy
    assert first == first


def test_ref_id() -> None:
    assert ref_id(Reference(City, 5)) == 5
    assert ref_id(City(zip_code="2000", city_name="Neuchâtel", id=9)) == 9
    assert ref_id(City(zip_code="2000", city_name="Neuchâtel")) is None
    assert ref_id(None) is None
