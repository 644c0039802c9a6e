from datetime import date

import pytest
from django.core.exceptions import ValidationError

from ho_core.officers.constants import PRIORITY_UNITS, PriorityUnit
from ho_core.officers.selectors import (
    OfficerFilter,
    build_timeline,
    compute_stats,
    filter_officers,
    get_priority_units,
    priority_allocation,
    select_by_ids,
    unit_distribution,
)

from .fakes import make_record

TODAY = date(2025, 3, 1)


@pytest.fixture
def mixed_records():
    rows = [
        ("Kunle", "Male", "Nephrology"),
        ("Ada", "Female", "Nephrology"),
        ("Bayo", "Male", "Nephrology"),
        ("Chidi", "Male", "Neurology"),
        ("Amaka", "Female", "Neurology"),
        ("Dapo", "Male", "Nephrology"),
        ("Efe", "Female", "Endocrinology"),
        ("Femi", "Male", "Gastroenterology"),
        ("Ngozi", "Female", "Nephrology"),
        ("Ayo", "Male", "Nephrology"),
    ]
    return [make_record(full_name=n, gender=g, unit_assigned=u) for n, g, u in rows]


def test_filter_is_conjunctive_and_sorted(mixed_records):
    flt = OfficerFilter(unit="Nephrology", gender="Male", sort_by="fullName", sort_order="asc")

    result = filter_officers(mixed_records, flt)

    assert [r.full_name for r in result] == ["Ayo", "Bayo", "Dapo", "Kunle"]
    assert all(r.unit_assigned == "Nephrology" and r.gender == "Male" for r in result)


def test_filter_descending(mixed_records):
    result = filter_officers(mixed_records, OfficerFilter(unit="Nephrology", sort_order="desc"))

    assert [r.full_name for r in result] == ["Ngozi", "Kunle", "Dapo", "Bayo", "Ayo", "Ada"]


def test_filter_does_not_mutate_input(mixed_records):
    before = list(mixed_records)
    filter_officers(mixed_records, OfficerFilter(sort_order="desc"))
    assert mixed_records == before


def test_search_matches_name_or_topic_case_insensitively():
    a = make_record(full_name="Tolu Adeyemi")
    b = make_record(full_name="Musa Bello", clinical_presentation_topic="Diabetic ketoacidosis")
    c = make_record(full_name="Ife Okafor", clinical_presentation_topic="Stroke")

    assert filter_officers([a, b, c], OfficerFilter(search_term="ADEYEMI")) == [a]
    assert filter_officers([a, b, c], OfficerFilter(search_term="ketoac")) == [b]
    assert filter_officers([a, b, c], OfficerFilter(search_term="zzz")) == []


def test_sort_is_stable_for_equal_keys():
    same_day = date(2025, 1, 6)
    records = [make_record(full_name=f"O{i}", date_signed_in=same_day) for i in range(5)]

    result = filter_officers(records, OfficerFilter(sort_by="dateSignedIn"))

    assert result == records


def test_unset_presentation_dates_sort_first_ascending():
    dated = make_record(clinical_presentation_date=date(2025, 2, 1))
    undated = make_record()

    result = filter_officers([dated, undated], OfficerFilter(sort_by="clinicalPresentationDate"))

    assert result == [undated, dated]


def test_filter_from_params_treats_any_as_unconstrained():
    flt = OfficerFilter.from_params({"unit": "any", "gender": "", "searchTerm": " ada ", "sortOrder": "DESC"})

    assert flt.unit == ""
    assert flt.gender == ""
    assert flt.search_term == "ada"
    assert flt.sort_order == "desc"
    assert flt.sort_by == "fullName"


@pytest.mark.parametrize(
    "params,field",
    [
        ({"unit": "Orthopaedics"}, "unit"),
        ({"gender": "Unknown"}, "gender"),
        ({"sortBy": "createdAt"}, "sortBy"),
        ({"sortOrder": "sideways"}, "sortOrder"),
    ],
)
def test_filter_from_params_rejects_invalid_values(params, field):
    with pytest.raises(ValidationError) as exc:
        OfficerFilter.from_params(params)
    assert field in exc.value.message_dict


def test_select_by_ids_keeps_view_order(mixed_records):
    picked = [mixed_records[4].id, mixed_records[1].id]

    assert select_by_ids(mixed_records, picked) == [mixed_records[1], mixed_records[4]]
    assert select_by_ids(mixed_records, []) == mixed_records


def test_unit_distribution_uses_fixed_order_and_omits_empty(mixed_records):
    dist = unit_distribution(mixed_records)

    assert list(dist) == ["Nephrology", "Neurology", "Endocrinology", "Gastroenterology"]
    assert dist["Nephrology"] == 6
    assert "Cardiology 1" not in dist


def test_stats_count_the_filtered_view():
    records = [
        make_record(gender="Male", clinical_presentation_date=date(2025, 3, 4)),
        make_record(gender="Female", clinical_presentation_date=date(2025, 3, 8)),
        make_record(gender="Female", date_signed_in=date(2024, 12, 10)),  # signs out 2025-03-04
        make_record(gender="Male", clinical_presentation_date=TODAY),
    ]

    stats = compute_stats(records, today=TODAY)

    assert stats.total == 4
    assert stats.male == 2
    assert stats.female == 2
    # today and today+7 are both outside the window
    assert stats.upcoming_presentations == 1
    assert stats.upcoming_sign_outs == 1


def test_priority_allocation_tallies_against_targets():
    records = [make_record(unit_assigned="Nephrology") for _ in range(4)]
    records += [make_record(unit_assigned="Neurology")]

    allocation = priority_allocation(records)

    by_name = {u.name: u for u in allocation.units}
    assert [u.name for u in allocation.units] == [u.name for u in PRIORITY_UNITS]
    assert by_name["Nephrology"].assigned == 4
    assert by_name["Nephrology"].is_complete
    assert by_name["Nephrology"].shortage == 0
    assert by_name["Nephrology"].progress == 100.0
    assert by_name["Neurology"].shortage == 1
    assert by_name["Neurology"].progress == 50.0
    assert by_name["Endocrinology"].officers == []
    assert allocation.total_required == 9
    assert allocation.total_assigned == 5


def test_priority_allocation_ignores_the_filter_view(mixed_records):
    filtered = filter_officers(mixed_records, OfficerFilter(gender="Female"))

    global_alloc = priority_allocation(mixed_records)
    stats = compute_stats(filtered, today=TODAY)

    assert stats.total == 4
    assert global_alloc.total_assigned == len(mixed_records)


def test_priority_units_can_be_configured(settings):
    settings.OFFICERS_PRIORITY_UNITS = [
        {"name": "Rheumatology", "required": "1", "priority": 1},
        PriorityUnit(name="Pulmonology", required=2, priority=2),
    ]

    units = get_priority_units()
    allocation = priority_allocation([make_record(unit_assigned="Rheumatology")])

    assert [u.name for u in units] == ["Rheumatology", "Pulmonology"]
    assert allocation.total_required == 3
    assert allocation.completion_percentage == 33


def test_sign_out_timeline_is_nearest_first():
    late = make_record(date_signed_in=date(2025, 1, 20))
    early = make_record(date_signed_in=date(2024, 12, 1))

    entries = build_timeline([late, early], "signout", today=TODAY)

    assert [e.officer for e in entries] == [early, late]
    assert entries[0].target_date == date(2025, 2, 23)
    assert entries[0].color == "past"
    assert entries[0].progress == 100.0


def test_presentation_timeline_skips_undated_officers():
    dated = make_record(clinical_presentation_date=date(2025, 3, 3))
    undated = make_record()

    entries = build_timeline([dated, undated], "presentation", today=TODAY)

    assert [e.officer for e in entries] == [dated]
    assert entries[0].days_until == 2
    assert entries[0].color == "urgent"


def test_timeline_rejects_unknown_kind():
    with pytest.raises(ValidationError):
        build_timeline([], "birthday")
