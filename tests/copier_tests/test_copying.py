from beanpath import copy_properties
from tests.beans import Address, Limits, Point


def test_copy() -> None:
    source, destination = Address(city='Oslo', zip_code='0150'), Address()

    copy_properties(Address, source, destination)

    assert destination == source
    assert destination is not source


def test_unset_attributes_are_skipped() -> None:
    source, destination = Point(1), Point(2)
    destination.y = 3

    copy_properties(Point, source, destination)

    assert destination.x == 1
    assert destination.y == 3


def test_constants_are_skipped() -> None:
    source, destination = Limits(), Limits()
    source.minimum = 5

    copy_properties(Limits, source, destination)

    assert destination.minimum == 5
    assert Limits.MAXIMUM == 10
