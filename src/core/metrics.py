"""In-process metrics collector with Prometheus text exposition."""

from __future__ import annotations

from collections import defaultdict
from threading import Lock
import time
from typing import Dict, Tuple


_lock = Lock()
_started_at = time.time()

_http_requests_total: Dict[Tuple[str, str, str], int] = defaultdict(int)
_http_request_duration_sum: Dict[Tuple[str, str], float] = defaultdict(float)
_http_request_duration_count: Dict[Tuple[str, str], int] = defaultdict(int)
_proposals_saved_total: Dict[str, int] = defaultdict(int)
_clients_added_total: Dict[str, int] = defaultdict(int)
_count_query_failures_total: Dict[str, int] = defaultdict(int)


def _escape_label(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


def _normalize_label(value: str, *, fallback: str = "unknown") -> str:
    normalized = (value or "").strip()
    return normalized or fallback


def record_http_request(*, method: str, path: str, status_code: int, duration_seconds: float) -> None:
    status = str(status_code)
    method_label = method.upper()
    path_label = path or "unknown"
    duration = max(duration_seconds, 0.0)

    with _lock:
        _http_requests_total[(method_label, path_label, status)] += 1
        _http_request_duration_sum[(method_label, path_label)] += duration
        _http_request_duration_count[(method_label, path_label)] += 1


def record_proposal_saved(*, tone: str, count: int = 1) -> None:
    if count <= 0:
        return
    with _lock:
        _proposals_saved_total[_normalize_label(tone)] += int(count)


def record_client_added(*, status: str, count: int = 1) -> None:
    if count <= 0:
        return
    with _lock:
        _clients_added_total[_normalize_label(status)] += int(count)


def record_count_query_failure(*, query: str, count: int = 1) -> None:
    if count <= 0:
        return
    with _lock:
        _count_query_failures_total[_normalize_label(query)] += int(count)


def _labelled_counter(
    lines: list[str],
    *,
    name: str,
    help_text: str,
    label: str,
    values: Dict[str, int],
) -> None:
    lines.extend(
        [
            f"# HELP {name} {help_text}",
            f"# TYPE {name} counter",
        ]
    )
    for key, value in sorted(values.items()):
        lines.append(f'{name}{{{label}="{_escape_label(key)}"}} {value}')


def render_prometheus_metrics(*, app_name: str, app_version: str, env: str) -> str:
    uptime = max(time.time() - _started_at, 0.0)

    with _lock:
        http_total = dict(_http_requests_total)
        duration_sum = dict(_http_request_duration_sum)
        duration_count = dict(_http_request_duration_count)
        proposals_saved_total = dict(_proposals_saved_total)
        clients_added_total = dict(_clients_added_total)
        count_query_failures_total = dict(_count_query_failures_total)

    lines = [
        "# HELP freelance_flow_build_info Build metadata.",
        "# TYPE freelance_flow_build_info gauge",
        (
            f'freelance_flow_build_info{{app_name="{_escape_label(app_name)}",'
            f'version="{_escape_label(app_version)}",env="{_escape_label(env)}"}} 1'
        ),
        "# HELP freelance_flow_process_uptime_seconds Process uptime in seconds.",
        "# TYPE freelance_flow_process_uptime_seconds gauge",
        f"freelance_flow_process_uptime_seconds {uptime:.6f}",
        "# HELP freelance_flow_http_requests_total Total HTTP requests.",
        "# TYPE freelance_flow_http_requests_total counter",
    ]

    for (method, path, status), value in sorted(http_total.items()):
        lines.append(
            (
                f'freelance_flow_http_requests_total{{method="{_escape_label(method)}",'
                f'path="{_escape_label(path)}",status="{_escape_label(status)}"}} {value}'
            )
        )

    lines.extend(
        [
            "# HELP freelance_flow_http_request_duration_seconds Request duration summary.",
            "# TYPE freelance_flow_http_request_duration_seconds summary",
        ]
    )
    for (method, path), value in sorted(duration_sum.items()):
        lines.append(
            (
                f'freelance_flow_http_request_duration_seconds_sum{{method="{_escape_label(method)}",'
                f'path="{_escape_label(path)}"}} {value:.6f}'
            )
        )
    for (method, path), value in sorted(duration_count.items()):
        lines.append(
            (
                f'freelance_flow_http_request_duration_seconds_count{{method="{_escape_label(method)}",'
                f'path="{_escape_label(path)}"}} {value}'
            )
        )

    _labelled_counter(
        lines,
        name="freelance_flow_proposals_saved_total",
        help_text="Total saved proposals.",
        label="tone",
        values=proposals_saved_total,
    )
    _labelled_counter(
        lines,
        name="freelance_flow_clients_added_total",
        help_text="Total added clients.",
        label="status",
        values=clients_added_total,
    )
    _labelled_counter(
        lines,
        name="freelance_flow_count_query_failures_total",
        help_text="Aggregate count queries that failed.",
        label="query",
        values=count_query_failures_total,
    )

    lines.append("")
    return "\n".join(lines)


def reset_metrics_for_tests() -> None:
    global _started_at
    with _lock:
        _http_requests_total.clear()
        _http_request_duration_sum.clear()
        _http_request_duration_count.clear()
        _proposals_saved_total.clear()
        _clients_added_total.clear()
        _count_query_failures_total.clear()
    _started_at = time.time()
