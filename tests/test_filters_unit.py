from datetime import timedelta

from core import Filter, FilterKind, Priority, SortOrder, TaskStatus, cycle_filter
from core.dates import utc_now

from conftest import make_task


def _tasks():
    now = utc_now()
    return [
        make_task("b overdue", due_date=now - timedelta(days=2), priority=Priority.HIGH),
        make_task("a done", status=TaskStatus.COMPLETED, priority=Priority.LOW),
        make_task("c soon", due_date=now + timedelta(days=3), tags=["work"], priority=Priority.URGENT),
        make_task("d later", due_date=now + timedelta(days=30), project_id="p1"),
    ]


def test_apply_matches_predicate_for_every_kind():
    tasks = _tasks()
    filters = [Filter(kind) for kind in FilterKind if kind not in (FilterKind.BY_PROJECT, FilterKind.BY_TAG, FilterKind.BY_PRIORITY)]
    filters += [Filter.by_project("p1"), Filter.by_tag("work"), Filter.by_priority(Priority.HIGH)]
    for flt in filters:
        assert flt.apply(tasks) == [t for t in tasks if flt.matches(t)]


def test_status_and_date_filters():
    tasks = _tasks()
    assert [t.title for t in Filter(FilterKind.COMPLETED).apply(tasks)] == ["a done"]
    assert [t.title for t in Filter(FilterKind.OVERDUE).apply(tasks)] == ["b overdue"]
    assert [t.title for t in Filter(FilterKind.DUE_THIS_WEEK).apply(tasks)] == ["c soon"]
    assert len(Filter(FilterKind.PENDING).apply(tasks)) == 3


def test_completed_task_is_never_overdue():
    task = make_task("x", due_date=utc_now() - timedelta(days=1), status=TaskStatus.COMPLETED)
    assert not Filter(FilterKind.OVERDUE).matches(task)


def test_by_project_requires_project():
    assert not Filter.by_project("p1").matches(make_task("orphan"))


def test_labels():
    assert Filter(FilterKind.DUE_TODAY).label() == "Due Today"
    assert Filter.by_tag("x").label() == "#x"
    assert Filter.by_priority(Priority.URGENT).label() == "Urgent Priority"
    assert SortOrder.PRIORITY_DESC.label == "Priority"


def test_cycle_filter_order_and_restart():
    seq = [Filter(FilterKind.ALL)]
    for _ in range(5):
        seq.append(cycle_filter(seq[-1]))
    assert [f.kind for f in seq] == [
        FilterKind.ALL,
        FilterKind.PENDING,
        FilterKind.COMPLETED,
        FilterKind.DUE_TODAY,
        FilterKind.OVERDUE,
        FilterKind.ALL,
    ]
    assert cycle_filter(Filter.by_tag("x")) == Filter(FilterKind.ALL)
    assert cycle_filter(None) == Filter(FilterKind.ALL)


def test_due_date_sort_puts_undated_last():
    tasks = _tasks()
    ordered = SortOrder.DUE_DATE_ASC.apply(tasks)
    assert [t.title for t in ordered] == ["b overdue", "c soon", "d later", "a done"]


def test_priority_sort_is_stable():
    first = make_task("first")
    second = make_task("second")
    urgent = make_task("urgent", priority=Priority.URGENT)
    ordered = SortOrder.PRIORITY_DESC.apply([first, second, urgent])
    assert [t.title for t in ordered] == ["urgent", "first", "second"]


def test_alphabetical_and_created_sorts():
    tasks = _tasks()
    assert [t.title for t in SortOrder.ALPHABETICAL.apply(tasks)][0] == "a done"
    base = utc_now()
    old = make_task("old", created_at=base - timedelta(days=1))
    new = make_task("new", created_at=base)
    assert [t.title for t in SortOrder.CREATED_DESC.apply([old, new])] == ["new", "old"]
    assert [t.title for t in SortOrder.CREATED_ASC.apply([new, old])] == ["old", "new"]


def test_priority_cycle_wraps():
    assert Priority.LOW.next() is Priority.MEDIUM
    assert Priority.URGENT.next() is Priority.LOW
    assert Priority.from_string("HIGH") is Priority.HIGH
    assert Priority.from_string("bogus") is Priority.MEDIUM
    assert TaskStatus.from_string("in-progress") is TaskStatus.IN_PROGRESS


def _dated_and_undated():
    base = utc_now()
    return [
        make_task("undated old", created_at=base - timedelta(days=5)),
        make_task("due soon", due_date=base + timedelta(days=1)),
        make_task("undated new", created_at=base - timedelta(days=1)),
        make_task("due late", due_date=base + timedelta(days=9)),
    ]


def test_due_date_asc_breaks_undated_ties_by_oldest_created():
    ordered = SortOrder.DUE_DATE_ASC.apply(_dated_and_undated())
    assert [t.title for t in ordered] == ["due soon", "due late", "undated old", "undated new"]


def test_due_date_desc_keeps_dated_first_and_newest_undated_first():
    ordered = SortOrder.DUE_DATE_DESC.apply(_dated_and_undated())
    assert [t.title for t in ordered] == ["due late", "due soon", "undated new", "undated old"]


def test_priority_desc_reverses_priority_asc_without_ties():
    tasks = [make_task(p.name, priority=p) for p in (Priority.HIGH, Priority.LOW, Priority.URGENT, Priority.MEDIUM)]
    ascending = SortOrder.PRIORITY_ASC.apply(tasks)
    assert [t.priority for t in ascending] == [Priority.LOW, Priority.MEDIUM, Priority.HIGH, Priority.URGENT]
    assert SortOrder.PRIORITY_DESC.apply(tasks) == list(reversed(ascending))


def test_tag_filter_ignores_case():
    task = make_task("x", tags=["Work"])
    assert Filter.by_tag("work").matches(task)
    assert task.has_tag("WORK")
    assert not Filter.by_tag("home").matches(task)
    task.remove_tag("Work")
    assert task.tags == []
