from typing import Any, Dict, List, Sequence, Tuple
import json
import logging

logger = logging.getLogger(__name__)

ERROR_LINE = "ERROR"

Row = Tuple[int, int]

# Template for the uptime report page
UPTIME_TEMPLATE = """
<!DOCTYPE html>
<html lang='en'>
<head>
    <meta charset='UTF-8'>
    <title>Station Uptime</title>
    <link href="https://cdn.jsdelivr.net/npm/bootswatch@5.3.2/dist/flatly/bootstrap.min.css" rel="stylesheet">
    <script src="https://cdn.jsdelivr.net/npm/chart.js"></script>
</head>
<body>
<nav class="navbar navbar-dark bg-primary">
  <div class="container-fluid">
    <span class="navbar-brand">Station Uptime</span>
  </div>
</nav>
<div class="container py-4">
<h1 class="mb-4">Station Uptime</h1>
<ul class="list-group mb-4">
    <li class="list-group-item">Stations: {station_count}</li>
    <li class="list-group-item">Fully available: {full_count}</li>
    <li class="list-group-item">Average uptime: {average:.1f}%</li>
</ul>
<div class="mb-4">
    <canvas id="uptimeChart" height="60"></canvas>
</div>
<table class="table table-striped">
    <thead class="table-dark">
        <tr><th>Station</th><th>Uptime</th></tr>
    </thead>
    <tbody>
        {rows}
    </tbody>
</table>
<script>
{chart_js}
</script>
<div class="text-muted small mt-4">
    <p>Page last updated: {updated}</p>
    <p>Processed in {elapsed:.2f} s</p>
</div>
</div>
</body>
</html>
"""


def render_text(rows: Sequence[Row]) -> str:
    """Return one ``"<id> <percent>"`` line per station."""
    return "".join(f"{station_id} {percent}\n" for station_id, percent in rows)


def render_json(rows: Sequence[Row]) -> Dict[str, Any]:
    return {
        "stations": [
            {"station_id": station_id, "uptime": percent} for station_id, percent in rows
        ]
    }


def _progress_class(percent: int) -> str:
    if percent >= 90:
        return "bg-success"
    if percent >= 50:
        return "bg-warning"
    return "bg-danger"


def _render_rows(rows: Sequence[Row]) -> str:
    lines: List[str] = []
    for station_id, percent in rows:
        bar = (
            "<div class='progress'>"
            f"<div class='progress-bar {_progress_class(percent)}' role='progressbar' "
            f"style='width: {percent}%' aria-valuenow='{percent}' "
            "aria-valuemin='0' aria-valuemax='100'>"
            f"{percent}%</div></div>"
        )
        lines.append(f"<tr><td>{station_id}</td><td>{bar}</td></tr>")
    return "\n".join(lines)


def render_html(
    rows: Sequence[Row],
    updated: str | None = None,
    elapsed: float | None = None,
) -> str:
    """Return the HTML page for an uptime report."""
    chart_js = ""
    if rows:
        chart_js += "const uptimeData = " + json.dumps(render_json(rows)["stations"]) + "\n"
        chart_js += (
            "new Chart(document.getElementById('uptimeChart').getContext('2d'), {"+
            "type: 'bar', data: {labels: uptimeData.map(d => d.station_id), datasets: ["+
            "{label: 'Uptime %', data: uptimeData.map(d => d.uptime),"+
            "backgroundColor: '#18bc9c'}]},"+
            "options: {scales: {y: {beginAtZero: true, max: 100}}}});\n"
        )
    average = sum(p for _, p in rows) / len(rows) if rows else 0.0
    html = UPTIME_TEMPLATE.format(
        station_count=len(rows),
        full_count=sum(1 for _, p in rows if p == 100),
        average=average,
        rows=_render_rows(rows),
        chart_js=chart_js,
        updated=updated or "N/A",
        elapsed=(elapsed if elapsed is not None else 0.0),
    )
    logger.debug("Generated uptime HTML with %d stations", len(rows))
    return html
