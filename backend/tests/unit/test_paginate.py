from uuid import uuid4

import pytest

from referencedata.repositories.versioned import Page, PageRequest, VersionIdentity, paginate


def _identities(count: int):
    return [VersionIdentity(uuid4(), 1) for _ in range(count)]


def test_page_request_rejects_negative_values():
    with pytest.raises(ValueError):
        PageRequest(page=-1, size=10)
    with pytest.raises(ValueError):
        PageRequest(page=0, size=-5)


def test_page_request_offset():
    assert PageRequest(page=3, size=10).offset == 30
    assert PageRequest(page=0, size=None).offset == 0
    assert PageRequest(page=0, size=0).unpaged


def test_windows_cover_every_identity_exactly_once():
    identities = _identities(23)
    seen = []
    for page in range(5):
        result = paginate(identities, PageRequest(page=page, size=5))
        assert result.total == 23
        seen.extend(result.window)
    assert seen == identities


def test_last_page_is_partial():
    identities = _identities(15)
    result = paginate(identities, PageRequest(page=1, size=10))
    assert result.window == identities[10:]
    assert result.total == 15


def test_page_past_the_end_is_empty_but_keeps_total():
    result = paginate(_identities(7), PageRequest(page=4, size=5))
    assert result.window == []
    assert result.total == 7


def test_unpaged_request_returns_everything_on_first_page():
    identities = _identities(4)
    assert paginate(identities, PageRequest()).window == identities
    assert paginate(identities, PageRequest(page=1)).window == []


def test_empty_identity_list():
    result = paginate([], PageRequest(page=0, size=10))
    assert result.window == []
    assert result.total == 0


def test_page_of_metadata():
    page = Page.of(["a", "b"], 12, PageRequest(page=1, size=5))
    assert page.page == 1
    assert page.page_size == 5
    assert page.total_pages == 3

    unpaged = Page.of(["a", "b"], 2, PageRequest())
    assert unpaged.page_size == 2
    assert unpaged.total_pages == 1

    empty = Page.of([], 0, PageRequest(page=0, size=10))
    assert empty.total_pages == 0
