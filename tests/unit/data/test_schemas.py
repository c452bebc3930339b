from __future__ import annotations


def test_schema_object_exists():
    from npireg.data import schemas

    assert hasattr(schemas, "SCHEMA"), "SCHEMA must exist in npireg.data.schemas"


def test_schema_fields_are_strings():
    from npireg.data.schemas import SCHEMA

    for field in ["DAY", "DAILY", "CUMULATIVE", "GROWTH_RATE", "DLOG_DAILY", "DLOG_CUMULATIVE", "INTERCEPT"]:
        assert isinstance(getattr(SCHEMA, field), str), f"SCHEMA.{field} must be a string"


def test_series_kinds_are_daily_and_cumulative():
    from npireg.data.schemas import SERIES_CUMULATIVE, SERIES_DAILY, SERIES_KINDS

    assert SERIES_KINDS == (SERIES_DAILY, SERIES_CUMULATIVE)
