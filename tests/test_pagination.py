import pytest

from storefront.errors import ClientValidationError
from storefront.pagination import Pagination
from storefront.schemas import Page


def test_first_page():
    pagination = Pagination(current_page=0, total_pages=3, total_items=30, page_size=10)
    assert not pagination.has_previous
    assert pagination.has_next
    assert pagination.show_controls
    assert pagination.page_numbers() == [0, 1, 2]


def test_last_page():
    pagination = Pagination(current_page=2, total_pages=3)
    assert pagination.has_previous
    assert not pagination.has_next


def test_single_page_hides_controls():
    pagination = Pagination(current_page=0, total_pages=1)
    assert not pagination.show_controls
    assert not pagination.has_next and not pagination.has_previous


def test_empty_listing():
    pagination = Pagination()
    assert pagination.page_numbers() == []
    assert not pagination.has_next
    assert pagination.check_page(0) == 0
    with pytest.raises(ClientValidationError):
        pagination.check_page(1)


@pytest.mark.parametrize("page", [-1, 3, 10])
def test_check_page_out_of_range(page):
    with pytest.raises(ClientValidationError, match="out of range"):
        Pagination(total_pages=3).check_page(page)


def test_from_page():
    page = Page[dict].model_validate(
        {"content": [{}], "number": 4, "size": 5, "totalPages": 9, "totalElements": 41, "last": False}
    )
    assert Pagination.from_page(page) == Pagination(current_page=4, total_pages=9, total_items=41, page_size=5)
