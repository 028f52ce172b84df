"""Tests for query parameter to SQL clause translation."""
from traffic_ops_api.crud.interfaces import WhereColumnInfo
from traffic_ops_api.crud.validators import is_int
from traffic_ops_api.crud.where import build_where_and_order_by_and_pagination

COLUMNS = {
    "id": WhereColumnInfo("t.id", is_int),
    "name": WhereColumnInfo("t.name"),
}


def build(params):
    return build_where_and_order_by_and_pagination(params, COLUMNS)


class TestWhere:

    def test_no_params(self):
        assert build({}) == ("", "", "", {}, [])

    def test_filters_are_bound_not_interpolated(self):
        where, _, _, values, errs = build({"name": "x'; DROP TABLE t; --", "id": "4"})
        assert where == "\nWHERE t.id=:id AND t.name=:name"
        assert values == {"id": "4", "name": "x'; DROP TABLE t; --"}
        assert errs == []

    def test_unknown_params_ignored(self):
        where, _, _, values, _ = build({"color": "blue"})
        assert where == ""
        assert values == {}

    def test_checker_failure(self):
        where, _, _, values, errs = build({"id": "abc"})
        assert where == ""
        assert values == {}
        assert [str(e) for e in errs] == ["id: must be an integer"]


class TestOrderBy:

    def test_ascending_by_default(self):
        _, order_by, _, _, _ = build({"orderby": "name"})
        assert order_by == "\nORDER BY t.name ASC"

    def test_descending(self):
        _, order_by, _, _, _ = build({"orderby": "id", "sortOrder": "DESC"})
        assert order_by == "\nORDER BY t.id DESC"

    def test_unknown_column_ignored(self):
        _, order_by, _, _, errs = build({"orderby": "color"})
        assert order_by == ""
        assert errs == []


class TestPagination:

    def test_limit(self):
        _, _, pagination, _, _ = build({"limit": "10"})
        assert pagination == "\nLIMIT 10"

    def test_limit_and_offset(self):
        _, _, pagination, _, _ = build({"limit": "10", "offset": "20"})
        assert pagination == "\nLIMIT 10\nOFFSET 20"

    def test_page(self):
        _, _, pagination, _, _ = build({"limit": "5", "page": "3"})
        assert pagination == "\nLIMIT 5\nOFFSET 10"

    def test_offset_without_limit_ignored(self):
        _, _, pagination, _, errs = build({"offset": "5"})
        assert pagination == ""
        assert errs == []

    def test_bad_values(self):
        _, _, pagination, _, errs = build({"limit": "0", "page": "x"})
        assert pagination == ""
        assert sorted(str(e) for e in errs) == [
            "limit must be at least 1",
            "page must be an integer",
        ]

    def test_loose_integers_rejected(self):
        _, _, pagination, _, errs = build({"limit": " 5", "offset": "1_0"})
        assert pagination == ""
        assert sorted(str(e) for e in errs) == [
            "limit must be an integer",
            "offset must be an integer",
        ]
