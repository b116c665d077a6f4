# Tests for CrossFilterEngine
# ===========================

from datetime import datetime

from slicer.crossfilter import (
    CategorySelection,
    CrossFilterEngine,
    NumericRange,
    RelativeDateConfig,
)
from slicer.data import DataSnapshot


def selection(*values, operator="In"):
    return CategorySelection(values=values, operator=operator)


class TestCrossFiltering:
    """Narrowing of each field by the others."""

    def test_selection_constrains_other_field(self, engine):
        """X is constrained to {A, B} by Y = y1."""
        result = engine.recompute({'T.Y': selection('y1')})
        assert result.category_values('T.X') == ['A', 'B']

    def test_field_not_constrained_by_itself(self, engine):
        result = engine.recompute({'T.Y': selection('y1')})
        assert result.category_values('T.Y') == ['y1', 'y2', 'y3']

    def test_two_filters_intersect(self, engine):
        result = engine.recompute({'T.X': selection('A'), 'T.Y': selection('y1')})
        assert result.category_values('T.Z') == ['p']
        assert result.category_values('T.X') == ['A', 'B']
        assert result.category_values('T.Y') == ['y1', 'y3']

    def test_filter_order_does_not_matter(self, engine):
        forward = engine.recompute({'T.X': selection('A'), 'T.Y': selection('y1')}).to_dict()
        backward = engine.recompute({'T.Y': selection('y1'), 'T.X': selection('A')}).to_dict()
        assert forward == backward

    def test_more_filters_never_grow_a_field(self, engine):
        one = engine.recompute({'T.Y': selection('y1')})
        two = engine.recompute({'T.Y': selection('y1'), 'T.X': selection('A')})
        assert len(two.category_values('T.Z')) <= len(one.category_values('T.Z'))

    def test_not_in_selection(self, engine):
        result = engine.recompute({'T.Y': selection('y1', operator="NotIn")})
        assert result.category_values('T.X') == ['A', 'C']

    def test_numeric_and_date_projection(self, engine):
        result = engine.recompute({'T.Y': selection('y1')})
        amount = result.numeric_range('T.Amount')
        assert (amount.min, amount.max) == (1.0, 2.0)
        when = result.date_range('T.Date')
        assert when.min_date == datetime(2024, 1, 1)
        assert when.max_date == datetime(2024, 1, 2)

    def test_empty_projection(self, engine):
        """A selection matching no rows empties the other fields."""
        result = engine.recompute({'T.Y': selection('nothing')})
        assert result.category_values('T.X') == []
        amount = result.numeric_range('T.Amount')
        assert (amount.min, amount.max) == (0, 0)
        when = result.date_range('T.Date')
        assert when.min_date == when.max_date

    def test_deterministic(self, engine):
        state = {'T.X': selection('A', 'C')}
        assert engine.recompute(state).to_dict() == engine.recompute(state).to_dict()


class TestOriginalViews:
    """Cases that fall back to the unconstrained views."""

    def test_no_filters(self, engine, snapshot):
        result = engine.recompute({})
        assert result.category_values('T.X') == ['A', 'B', 'C']
        assert result.numeric_range('T.Amount').max == 5.0

    def test_empty_selection_is_inactive(self, engine):
        result = engine.recompute({'T.Y': selection()})
        assert result.category_values('T.X') == ['A', 'B', 'C']

    def test_cross_filtering_disabled(self, engine):
        result = engine.recompute({'T.Y': selection('y1')}, enable_cross_filtering=False)
        assert result.category_values('T.X') == ['A', 'B', 'C']

    def test_non_category_filters_do_not_narrow(self, engine):
        state = {
            'T.Amount': NumericRange(min=100),
            'T.Date': RelativeDateConfig(count=3),
        }
        result = engine.recompute(state)
        assert result.category_values('T.X') == ['A', 'B', 'C']
        assert result.numeric_range('T.Amount').max == 5.0

    def test_filter_on_missing_column_ignored(self, engine):
        result = engine.recompute({'T.Missing': selection('x')})
        assert result.category_values('T.X') == ['A', 'B', 'C']

    def test_missing_target_column_keeps_original(self, table):
        snapshot = DataSnapshot.from_table(table, category_fields=['T.X', 'T.Gone'])
        result = CrossFilterEngine(snapshot).recompute({'T.X': selection('A')})
        assert result.category_values('T.Gone') == []
        assert [v.field.key for v in result.category_views] == ['T.X', 'T.Gone']

    def test_snapshot_not_mutated(self, engine, snapshot):
        engine.recompute({'T.Y': selection('y1')})
        assert snapshot.category_view('T.X').values == ['A', 'B', 'C']

    def test_result_views_are_copies(self, engine, snapshot):
        result = engine.recompute({})
        result.category_views[0].values.append('Z')
        assert snapshot.category_view('T.X').values == ['A', 'B', 'C']


class TestValidIndices:
    """Row-index intersection."""

    def test_valid_indices(self, engine):
        rows = engine.valid_indices({'T.Y': selection('y1', 'y3')})
        assert rows.tolist() == [0, 1, 4]

    def test_valid_indices_intersection(self, engine):
        rows = engine.valid_indices({'T.Y': selection('y1', 'y3'), 'T.X': selection('A')})
        assert rows.tolist() == [0, 4]

    def test_no_table(self):
        engine = CrossFilterEngine(DataSnapshot(None))
        assert engine.valid_indices({'T.X': selection('A')}) is None


class TestWithStateStore:
    """Recompute straight from a FilterStateStore."""

    def test_recompute_from_store(self, engine, store):
        store.toggle_category('T.Y', 'y1', True)
        result = engine.recompute(store)
        assert result.category_values('T.X') == ['A', 'B']
        assert engine.current is result

    def test_pending_selections_count(self, engine):
        from slicer.crossfilter import FilterStateStore
        deferred = FilterStateStore(apply_mode="deferred")
        deferred.toggle_category('T.Y', 'y2', True)
        assert engine.recompute(deferred).category_values('T.X') == ['C']

    def test_reset_restores_originals(self, engine, store):
        store.toggle_category('T.Y', 'y1', True)
        engine.recompute(store)
        store.reset_all()
        assert engine.recompute(store).category_values('T.X') == ['A', 'B', 'C']
