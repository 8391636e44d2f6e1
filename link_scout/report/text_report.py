# link_scout/report/text_report.py

"""
Plain-text report for LinkScout.

Lists crawled pages, checked external links and every broken URL.
"""
from typing import List

from link_scout.aggregator import CheckReport


def render_text(report: CheckReport, show_timer: bool = False) -> str:
    """
    Render *report* as the human-readable summary printed at the end of a run.

    :param report: CheckReport of the finished run
    :param show_timer: append the elapsed time in whole seconds
    :return: the report text (no trailing newline)

    Example:
    ```python
    from link_scout.report.text_report import render_text
    click.echo(render_text(report, show_timer=True))
    ```
    """
    lines: List[str] = [f"--> pages found on the site ({len(report.pages)}):"]
    lines.extend(report.pages)

    lines.append(f"--> external links checked ({len(report.links)}):")
    lines.extend(report.links)

    if report.success:
        lines.append("--> no broken urls found.")
    else:
        lines.append(f"--> WARNING: broken urls found ({len(report.failures)}):")
        lines.extend(str(failure) for failure in report.failures)

    if show_timer and report.elapsed is not None:
        lines.append(f"Timer: {int(report.elapsed)} seconds.")

    return "\n".join(lines)
