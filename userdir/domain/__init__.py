"""Domain layer: user records, derived directory views, and port contracts.

Nothing in this package performs I/O. Adapters produce ``UserRecord`` values,
and the view pipeline turns them into the filtered, aggregated, and paginated
views consumed by ``userdir.viewmodels``.
"""
