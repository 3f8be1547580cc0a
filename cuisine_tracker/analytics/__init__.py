"""Progress analytics over in-memory catalog and progress snapshots.

Modules
-------
catalog   — CatalogIndex (id lookup, category grouping) + search/filter helpers
progress  — aggregate() -> ProgressStats, diversity score, next goal
streaks   — day-, strict-day- and week-granularity streaks
trends    — month-over-month trend with week-of-month breakdown
events    — record_try(): apply one tried event to a progress snapshot

Every function here is pure: no I/O, no module-level mutable state.
"""
