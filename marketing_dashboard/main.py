"""Marketing Dashboard entrypoint."""

from __future__ import annotations

import logging

from dashboard.application.report_service import run_dashboard_pipeline
from dashboard.settings import load_settings


def main() -> None:
    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    result = run_dashboard_pipeline(settings)

    view_text = ", ".join(
        f"{name}={'ok' if state.ok else 'error'}" for name, state in result.views.items()
    )
    print(f"Views prepared: {view_text}")
    weekly = result.views.get("weekly")
    if weekly is not None and weekly.content is not None and weekly.content.used_fallback:
        print("Weekly view used the default dataset")
    stage_text = ", ".join([f"{name}={seconds:.3f}s" for name, seconds in result.stage_timings])
    print(f"Stage Timing: {stage_text}")
    print(f"Total Elapsed: {result.total_elapsed:.3f}s")
    print(f"Saved JSON: {result.json_path}")
    print(f"Saved HTML: {result.html_path}")
    if result.excel_saved:
        print(f"Saved Excel: {result.excel_path}")
    else:
        print(f"Excel save skipped: {result.excel_error_message}")


if __name__ == "__main__":
    main()
