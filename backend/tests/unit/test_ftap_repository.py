"""
FacilityTypeApprovedProductRepository: resolve / paginate / hydrate
"""
from uuid import uuid4

import pytest
from sqlalchemy.exc import OperationalError

from referencedata.core.exceptions import DataAccessException, ErrorKind, NotFoundException, ValidationException
from referencedata.repositories.facility_type_approved_product_repository import (
    FacilityTypeApprovedProductRepository,
    FacilityTypeApprovedProductSearchParams as Params,
)
from referencedata.repositories.versioned import PageRequest, VersionIdentity
from tests.conftest import make_ftap, make_orderable


def _identity(ftap) -> VersionIdentity:
    return VersionIdentity(ftap.id, ftap.version_id)


class TestSearchPaging:

    def test_first_page_of_fifteen(self, db, epi_ftaps):
        repo = FacilityTypeApprovedProductRepository(db)
        params = Params(facility_type_codes=("health_center",), program_code="EPI", active=True)

        page = repo.search(params, PageRequest(page=0, size=10))

        assert page.total == 15
        assert len(page.items) == 10
        assert page.total_pages == 2
        assert {(f.id, f.version_id) for f in page.items} <= {_identity(f) for f in epi_ftaps}

    def test_second_page_holds_the_rest(self, db, epi_ftaps):
        repo = FacilityTypeApprovedProductRepository(db)
        params = Params(facility_type_codes=("health_center",), program_code="EPI")

        first = repo.search(params, PageRequest(page=0, size=10))
        second = repo.search(params, PageRequest(page=1, size=10))

        assert len(second.items) == 5
        ids = [f.id for f in first.items] + [f.id for f in second.items]
        assert len(set(ids)) == 15

    def test_search_is_idempotent(self, db, epi_ftaps):
        repo = FacilityTypeApprovedProductRepository(db)
        params = Params(facility_type_codes=("health_center",), program_code="EPI")

        first = repo.search(params, PageRequest(page=0, size=10))
        again = repo.search(params, PageRequest(page=0, size=10))

        assert [_identity(f) for f in first.items] == [_identity(f) for f in again.items]
        assert first.total == again.total

    def test_page_past_the_end_keeps_total(self, db, epi_ftaps):
        repo = FacilityTypeApprovedProductRepository(db)
        page = repo.search(Params(program_code="EPI"), PageRequest(page=5, size=10))
        assert page.items == []
        assert page.total == 15

    def test_unpaged_returns_all(self, db, epi_ftaps):
        repo = FacilityTypeApprovedProductRepository(db)
        page = repo.search(Params(), PageRequest())
        assert len(page.items) == 15
        assert page.page_size == 15

    def test_no_match_skips_hydration(self, db, epi_ftaps, monkeypatch):
        repo = FacilityTypeApprovedProductRepository(db)

        def _fail(window):
            raise AssertionError("hydrate must not run without matches")

        monkeypatch.setattr(repo, "hydrate", _fail)
        page = repo.search(Params(program_code="UNKNOWN"), PageRequest(page=0, size=10))
        assert page.total == 0
        assert page.items == []


class TestIdentityResolution:

    def test_identities_are_unique_and_ordered(self, db, epi_ftaps):
        repo = FacilityTypeApprovedProductRepository(db)
        identities = repo.resolve_identities(
            Params(facility_type_codes=("health_center", "health_center"), program_code="EPI")
        )
        assert len(identities) == len(set(identities)) == 15
        assert identities == sorted(identities)

    def test_only_latest_version_is_returned(self, db, reference_data):
        rd = reference_data
        orderable = make_orderable(db, "BCG", programs=[rd.epi])
        v1 = make_ftap(db, orderable, rd.epi, rd.health_center, max_periods_of_stock=3)
        v2 = make_ftap(db, orderable, rd.epi, rd.health_center, ftap_id=v1.id, version_id=2, max_periods_of_stock=5)

        repo = FacilityTypeApprovedProductRepository(db)
        assert repo.resolve_identities(Params()) == [VersionIdentity(v1.id, 2)]
        assert repo.search(Params(), PageRequest()).items[0].max_periods_of_stock == v2.max_periods_of_stock

    def test_deactivated_latest_version_hides_active_history(self, db, reference_data):
        rd = reference_data
        orderable = make_orderable(db, "BCG", programs=[rd.epi])
        v1 = make_ftap(db, orderable, rd.epi, rd.health_center, active=True)
        make_ftap(db, orderable, rd.epi, rd.health_center, ftap_id=v1.id, version_id=2, active=False)

        repo = FacilityTypeApprovedProductRepository(db)
        assert repo.resolve_identities(Params()) == []
        assert repo.resolve_identities(Params(active=False)) == [VersionIdentity(v1.id, 2)]

    def test_active_defaults_to_true(self, db, reference_data, epi_ftaps):
        rd = reference_data
        orderable = make_orderable(db, "OLD", programs=[rd.epi])
        make_ftap(db, orderable, rd.epi, rd.health_center, active=False)

        repo = FacilityTypeApprovedProductRepository(db)
        assert repo.resolve_identities(Params()) == repo.resolve_identities(Params(active=True))
        assert len(repo.resolve_identities(Params(active=False))) == 1

    def test_orderable_latest_version_decides_program_membership(self, db, reference_data):
        rd = reference_data
        v1 = make_orderable(db, "MEASLES", programs=[rd.epi])
        make_orderable(db, "MEASLES", programs=[rd.family_planning], orderable_id=v1.id, version_id=2)
        make_ftap(db, v1, rd.epi, rd.health_center)

        repo = FacilityTypeApprovedProductRepository(db)
        assert repo.resolve_identities(Params(program_code="EPI")) == []

    def test_inactive_program_orderable_is_excluded(self, db, reference_data):
        rd = reference_data
        orderable = make_orderable(db, "IUD", programs=[rd.family_planning], program_active=False)
        make_ftap(db, orderable, rd.family_planning, rd.health_center)

        repo = FacilityTypeApprovedProductRepository(db)
        assert repo.resolve_identities(Params(program_code="FP")) == []

    def test_full_supply_filter(self, db, reference_data):
        rd = reference_data
        full = make_ftap(db, make_orderable(db, "FULL", programs=[rd.epi]), rd.epi, rd.health_center)
        non_full = make_ftap(
            db, make_orderable(db, "EXTRA", programs=[rd.epi], full_supply=False), rd.epi, rd.health_center
        )

        repo = FacilityTypeApprovedProductRepository(db)
        assert repo.resolve_identities(Params(full_supply=True)) == [_identity(full)]
        assert repo.resolve_identities(Params(full_supply=False)) == [_identity(non_full)]
        assert len(repo.resolve_identities(Params())) == 2

    def test_program_id_and_orderable_filters(self, db, reference_data):
        rd = reference_data
        epi_orderable = make_orderable(db, "BCG", programs=[rd.epi])
        fp_orderable = make_orderable(db, "PILL", programs=[rd.family_planning])
        epi_ftap = make_ftap(db, epi_orderable, rd.epi, rd.health_center)
        fp_ftap = make_ftap(db, fp_orderable, rd.family_planning, rd.health_center)

        repo = FacilityTypeApprovedProductRepository(db)
        assert repo.resolve_identities(Params(program_id=rd.epi.id)) == [_identity(epi_ftap)]
        assert repo.resolve_identities(Params(orderable_ids=(fp_orderable.id,))) == [_identity(fp_ftap)]

    def test_facility_resolves_to_its_type(self, db, reference_data):
        rd = reference_data
        orderable = make_orderable(db, "BCG", programs=[rd.epi])
        hc = make_ftap(db, orderable, rd.epi, rd.health_center)
        make_ftap(db, orderable, rd.epi, rd.district_hospital)

        repo = FacilityTypeApprovedProductRepository(db)
        assert repo.resolve_identities(Params(facility_id=rd.facility.id)) == [_identity(hc)]

    def test_unknown_facility_raises_not_found(self, db, epi_ftaps, monkeypatch):
        repo = FacilityTypeApprovedProductRepository(db)

        def _fail(window):
            raise AssertionError("hydrate must not run for an unknown facility")

        monkeypatch.setattr(repo, "hydrate", _fail)
        with pytest.raises(NotFoundException) as exc_info:
            repo.search(Params(facility_id=uuid4()), PageRequest(page=0, size=10))
        assert exc_info.value.kind is ErrorKind.FACILITY_NOT_FOUND

    def test_facility_and_type_codes_together_are_rejected(self, db, reference_data):
        repo = FacilityTypeApprovedProductRepository(db)
        with pytest.raises(ValidationException) as exc_info:
            repo.search(
                Params(facility_id=reference_data.facility.id, facility_type_codes=("health_center",)),
                PageRequest(),
            )
        assert exc_info.value.kind is ErrorKind.SEARCH_FACILITY_FILTER_CONFLICT


class TestHydration:

    def test_round_trip_preserves_window_order(self, db, epi_ftaps):
        repo = FacilityTypeApprovedProductRepository(db)
        window = list(reversed(repo.resolve_identities(Params())))[:7]

        hydrated = repo.hydrate(window)

        assert [_identity(f) for f in hydrated] == window

    def test_empty_window_issues_no_query(self, db, statements):
        repo = FacilityTypeApprovedProductRepository(db)
        assert repo.hydrate([]) == []
        assert statements == []

    def test_hydrates_historical_version_exactly(self, db, reference_data):
        rd = reference_data
        orderable = make_orderable(db, "BCG", programs=[rd.epi])
        v1 = make_ftap(db, orderable, rd.epi, rd.health_center, max_periods_of_stock=3)
        make_ftap(db, orderable, rd.epi, rd.health_center, ftap_id=v1.id, version_id=2, max_periods_of_stock=9)

        repo = FacilityTypeApprovedProductRepository(db)
        [hydrated] = repo.hydrate([VersionIdentity(v1.id, 1)])
        assert hydrated.version_id == 1
        assert hydrated.max_periods_of_stock == 3

    def test_missing_identity_is_skipped(self, db, epi_ftaps):
        repo = FacilityTypeApprovedProductRepository(db)
        window = [_identity(epi_ftaps[0]), VersionIdentity(uuid4(), 1)]
        assert [_identity(f) for f in repo.hydrate(window)] == [_identity(epi_ftaps[0])]

    def test_window_larger_than_one_query_chunk(self, db, many_epi_ftaps):
        repo = FacilityTypeApprovedProductRepository(db)

        page = repo.search(Params(program_code="EPI"), PageRequest())

        assert page.total == many_epi_ftaps
        assert len(page.items) == many_epi_ftaps
        assert [_identity(f) for f in page.items] == repo.resolve_identities(Params(program_code="EPI"))


class TestDataAccessFailures:

    def test_identity_query_failure_is_wrapped(self, db, reference_data, monkeypatch):
        repo = FacilityTypeApprovedProductRepository(db)

        def _broken(*args, **kwargs):
            raise OperationalError("SELECT", {}, Exception("database is locked"))

        monkeypatch.setattr(db, "execute", _broken)
        with pytest.raises(DataAccessException) as exc_info:
            repo.resolve_identities(Params())
        assert exc_info.value.kind is ErrorKind.DATA_ACCESS

    def test_hydration_failure_is_wrapped(self, db, epi_ftaps, monkeypatch):
        repo = FacilityTypeApprovedProductRepository(db)
        window = repo.resolve_identities(Params())[:3]

        def _broken(*args, **kwargs):
            raise OperationalError("SELECT", {}, Exception("connection reset"))

        monkeypatch.setattr(db, "query", _broken)
        with pytest.raises(DataAccessException):
            repo.hydrate(window)
