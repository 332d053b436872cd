"""NiceGUI entrypoint for the user directory web runtime."""

from __future__ import annotations

import argparse

from nicegui import app, run, ui

from userdir.utils.logging import configure_root
from userdir.viewmodels.settings_vm import SettingsConfig, SettingsVM
from userdir.viewmodels.user_directory_vm import LoadState, UserDirectoryVM
from userdir.web_ui.runtime import DirectoryRuntime, footer_text, user_row


def _install_theme() -> None:
    """Install global CSS tokens for the directory page."""
    ui.add_head_html(
        """
<style>
:root {
  --ud-bg-a: #eff6ff;
  --ud-bg-b: #f5f3ff;
  --ud-card: #ffffff;
  --ud-border: #f3f4f6;
  --ud-accent: #2563eb;
  --ud-accent-2: #4f46e5;
  --ud-accent-3: #9333ea;
  --ud-muted: #4b5563;
}
body {
  background: linear-gradient(135deg, var(--ud-bg-a), var(--ud-bg-b));
}
.ud-page { max-width: 56rem; margin: 0 auto; padding: 2rem 1rem; }
.ud-card {
  background: var(--ud-card);
  border: 1px solid var(--ud-border);
  border-radius: 1rem;
  box-shadow: 0 10px 15px -3px rgba(0, 0, 0, 0.1);
}
.ud-avatar {
  width: 3rem; height: 3rem; border-radius: 9999px;
  display: flex; align-items: center; justify-content: center;
  color: white; font-weight: 700;
  background: linear-gradient(90deg, #3b82f6, #6366f1);
}
.ud-stat { font-size: 1.875rem; font-weight: 700; }
.ud-muted { color: var(--ud-muted); }
</style>
        """
    )


def _build_ui(runtime: DirectoryRuntime) -> None:
    """Register the NiceGUI pages for the runtime."""

    @ui.page("/")
    async def index() -> None:
        _install_theme()
        vm: UserDirectoryVM = runtime.new_directory_vm()

        async def fetch(*, retry: bool = False) -> None:
            if not vm.begin_fetch(retry=retry):
                return
            render_directory.refresh()
            await run.io_bound(vm.run_fetch)
            render_directory.refresh()

        async def on_retry() -> None:
            await fetch(retry=True)

        def on_search(value: object) -> None:
            vm.set_search_term(str(value or ""))
            render_results.refresh()

        def on_page(page: int) -> None:
            vm.set_page(page)
            render_results.refresh()

        def on_prev() -> None:
            vm.prev_page()
            render_results.refresh()

        def on_next() -> None:
            vm.next_page()
            render_results.refresh()

        @ui.refreshable
        def render_results() -> None:
            snapshot = vm.snapshot()
            stats = snapshot.stats
            with ui.card().classes("ud-card w-full q-pa-lg q-mb-lg"):
                with ui.row().classes("w-full justify-around"):
                    for value, label, color in (
                        (stats.count, "Total Users", "text-blue-600"),
                        (stats.average_age, "Average Age", "text-indigo-600"),
                        (stats.max_age, "Oldest User", "text-purple-600"),
                    ):
                        with ui.column().classes("items-center"):
                            ui.label(str(value)).classes(f"ud-stat {color}")
                            ui.label(label).classes("ud-muted")

            with ui.card().classes("ud-card w-full q-pa-none"):
                with ui.row().classes("items-center q-pa-md"):
                    ui.icon("filter_alt")
                    ui.label(f"Users ({snapshot.filtered_count})").classes("text-h6")
                ui.separator()
                if not snapshot.page_records:
                    with ui.column().classes("w-full items-center q-pa-xl"):
                        ui.icon("person_off", size="3rem").classes("ud-muted")
                        ui.label("No users found").classes("text-subtitle1 ud-muted")
                        ui.label("Try adjusting your search criteria").classes("ud-muted")
                for user in snapshot.page_records:
                    row = user_row(user)
                    with ui.row().classes("w-full items-center justify-between q-pa-md"):
                        with ui.row().classes("items-center q-gutter-md"):
                            ui.label(row["initials"]).classes("ud-avatar")
                            with ui.column().classes("q-gutter-none"):
                                ui.label(row["name"]).classes("text-subtitle1 text-weight-medium")
                                ui.label(row["age"]).classes("ud-muted")
                        ui.button("View Profile").props("flat dense no-caps")

            with ui.column().classes("w-full items-center q-mt-lg"):
                ui.label(footer_text(snapshot)).classes("ud-muted")
                if snapshot.show_pagination:
                    with ui.row().classes("q-gutter-sm"):
                        prev_btn = ui.button(icon="chevron_left", on_click=on_prev)
                        prev_btn.set_enabled(snapshot.has_prev)
                        for number in vm.page_numbers():
                            ui.button(
                                str(number),
                                color="indigo" if number == snapshot.current_page else "grey-4",
                                on_click=lambda _, n=number: on_page(n),
                            )
                        next_btn = ui.button(icon="chevron_right", on_click=on_next)
                        next_btn.set_enabled(snapshot.has_next)

        @ui.refreshable
        def render_directory() -> None:
            snapshot = vm.snapshot()
            if snapshot.state is LoadState.LOADING:
                with ui.column().classes("w-full items-center q-pa-xl"):
                    ui.spinner(size="3rem", color="primary")
                    ui.label("Loading users...").classes("text-h6 ud-muted")
                return
            if snapshot.state is LoadState.FAILED:
                with ui.column().classes("w-full items-center q-pa-xl"):
                    with ui.card().classes("ud-card q-pa-lg items-center"):
                        ui.icon("warning", color="negative", size="2.5rem")
                        ui.label("Oops!").classes("text-h5")
                        ui.label(snapshot.error_message or "").classes("text-negative")
                        ui.button("Try Again", on_click=on_retry, color="negative")
                return

            with ui.column().classes("w-full items-center q-mb-lg"):
                ui.icon("groups", size="3rem").classes("text-blue-600")
                ui.label("User Directory").classes("text-h4 text-weight-bold")
                ui.label("Manage and explore your user community").classes("ud-muted")
            ui.input(
                placeholder="Search users...",
                value=snapshot.search_term,
                on_change=lambda e: on_search(e.value),
            ).props("outlined clearable").classes("w-full q-mb-lg")
            render_results()

        with ui.column().classes("ud-page w-full"):
            render_directory()

        ui.timer(0.1, fetch, once=True)


def _parse_args() -> argparse.Namespace:
    """Parse CLI args for web runtime startup."""
    parser = argparse.ArgumentParser(description="Run the user directory NiceGUI web UI.")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8080)
    parser.add_argument("--reload", action="store_true")
    parser.add_argument("--offline", action="store_true", help="Serve the built-in sample users.")
    parser.add_argument("--api-base-url", help="Overrides USERDIR_API_BASE_URL.")
    parser.add_argument("--page-size", help="Overrides USERDIR_PAGE_SIZE.")
    parser.add_argument("--debug", action="store_true", help="Enable DEBUG logging.")
    parser.add_argument("--smoke-test", action="store_true")
    return parser.parse_args()


def _settings_from(args: argparse.Namespace) -> SettingsVM:
    """Environment settings with CLI overrides applied on top."""
    settings_vm = SettingsVM(config=SettingsConfig.from_env())
    overrides = {
        "api_base_url": args.api_base_url,
        "page_size": args.page_size,
        "debug_logging": True if args.debug else None,
    }
    settings_vm.apply_dict({key: value for key, value in overrides.items() if value is not None})
    return settings_vm


def main() -> None:
    """CLI entrypoint for the NiceGUI runtime."""
    args = _parse_args()
    try:
        settings_vm = _settings_from(args)
    except ValueError as exc:
        raise SystemExit(f"Invalid settings: {exc}") from exc
    configure_root(settings_vm.config.debug_logging)
    runtime = DirectoryRuntime(settings_vm=settings_vm, offline=args.offline)
    if args.smoke_test:
        try:
            vm = runtime.new_directory_vm()
            vm.load()
        finally:
            runtime.close()
        snapshot = vm.snapshot()
        print("web-smoke-ok", snapshot.state.value, snapshot.stats.count)
        return
    _build_ui(runtime)
    app.on_shutdown(runtime.close)
    ui.run(
        host=args.host,
        port=args.port,
        title="User Directory",
        reload=args.reload,
        show=False,
    )


if __name__ in {"__main__", "__mp_main__"}:
    main()
