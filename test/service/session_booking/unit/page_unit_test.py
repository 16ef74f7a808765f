import pytest

from src.platform.config.core_setting import settings
from src.service.session_booking.app.dto import Page, PageRequest


@pytest.mark.unit
class TestPageRequest:
    def test_defaults(self) -> None:
        request = PageRequest.of()

        assert request.page == 1
        assert request.items_per_page == settings.DEFAULT_ITEMS_PER_PAGE
        assert request.offset == 0

    def test_clamps_instead_of_rejecting(self) -> None:
        request = PageRequest.of(page=-4, items_per_page=10_000)

        assert request.page == 1
        assert request.items_per_page == settings.MAX_ITEMS_PER_PAGE

    def test_offset(self) -> None:
        assert PageRequest.of(page=3, items_per_page=5).offset == 10


@pytest.mark.unit
@pytest.mark.parametrize('total, expected_pages', [(0, 0), (1, 1), (10, 1), (11, 2)])
def test_page_count(total: int, expected_pages: int) -> None:
    page = Page.build(items=[], total=total, request=PageRequest.of(items_per_page=10))

    assert page.pages == expected_pages
