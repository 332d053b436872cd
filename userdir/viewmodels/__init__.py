"""ViewModel package for UI state and command surfaces.

Call context:
    ``userdir/web_ui/runtime.py`` imports concrete viewmodels from this package
    and binds NiceGUI callbacks to their entry points.

Dependencies:
    Modules in this package depend on domain types and the pure view pipeline
    only. I/O adapters and use-case orchestration remain outside.

Responsibilities:
    - Expose UI state and command entry points.
    - Turn domain records into read-only snapshots for rendering.
    - Keep MVVM boundaries explicit by avoiding transport or persistence logic.
"""
