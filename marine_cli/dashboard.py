"""Static HTML dashboard: one table and two charts per view, toggled by buttons."""
import base64
from html import escape as html_esc
from pathlib import Path

from . import charts
from .viewer import METRICS, MULTI_DAY, SHORT_RANGE, bar_widths, format_value

BUTTONS = ((SHORT_RANGE, "1 Day"), (MULTI_DAY, "10 Days"))


def _img(fig, alt) -> str:
    data = base64.b64encode(charts.chart_png(fig)).decode("ascii")
    return f'<img alt="{html_esc(alt)}" src="data:image/png;base64,{data}">'


def render_rows(records) -> str:
    if not records:
        return '<div class="empty">No data</div>'
    rows = []
    for i, rec in enumerate(records):
        widths = bar_widths(rec)
        cells = [f'<div class="label">{html_esc(rec.row_label or rec.label)}</div>']
        for name, (unit, _) in METRICS.items():
            cells.append(
                f'<div class="cell"><span>{format_value(getattr(rec, name))} {html_esc(unit)}</span>'
                f'<div class="bar {name}" style="width:{widths[name]:.1f}%"></div></div>'
            )
        stripe = "even" if i % 2 == 0 else "odd"
        rows.append(f'<div class="row {stripe}">{"".join(cells)}</div>')
    return "\n".join(rows)


def render_view(view, records, active) -> str:
    hidden = "" if active else " hidden"
    return f'''<section id="view-{view}" class="view"{hidden}>
  <div class="table">
{render_rows(records)}
  </div>
  <div class="chart"><h2>Temperature &amp; Wind</h2>{_img(charts.temperature_wind_figure(records), "Temperature and wind")}</div>
  <div class="chart"><h2>Pressure &amp; Waves</h2>{_img(charts.pressure_waves_figure(records), "Pressure and waves")}</div>
</section>'''


def render_dashboard(views, title="Rotterdam Weather Forecast", active=SHORT_RANGE) -> str:
    """`views` maps view name to a list of DisplayRecord."""
    buttons = "\n".join(
        f'  <button data-view="{view}" class="{"active" if view == active else ""}">{text}</button>'
        for view, text in BUTTONS
    )
    sections = "\n".join(
        render_view(view, views.get(view, []), view == active) for view, _ in BUTTONS
    )
    return f'''<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>{html_esc(title)}</title>
<style>
  body {{ font-family: 'Inter', sans-serif; max-width: 1100px; margin: auto; padding: 2rem;
         background: linear-gradient(to right, #e0eafc, #cfdef3); }}
  h1, h2 {{ color: #3B3BFF; }}
  h1 {{ text-align: center; }}
  .buttons {{ text-align: center; margin-bottom: 2rem; }}
  button {{ padding: 0.6rem 1.6rem; margin-right: 0.5rem; border-radius: 50px; border: none;
           cursor: pointer; font-weight: 600; background: #e4e4e8; color: #555; }}
  button.active {{ background: linear-gradient(135deg, #6C63FF, #3B3BFF); color: #fff; }}
  .table {{ max-height: 350px; overflow-y: auto; display: grid; gap: 0.8rem; padding: 1rem;
           border-radius: 20px; background: #f0f4f8; margin-bottom: 2rem; }}
  .row {{ display: grid; grid-template-columns: 180px repeat(4, 1fr); align-items: center;
         padding: 0.7rem 1rem; border-radius: 15px; }}
  .row.even {{ background: #f8f9fb; }} .row.odd {{ background: #ffffff; }}
  .label {{ font-weight: 600; color: #3B3BFF; }}
  .cell {{ display: flex; align-items: center; gap: 0.5rem; }}
  .bar {{ height: 10px; border-radius: 5px; }}
  .bar.temperature {{ background: {charts.COLORS["temperature"]}; }}
  .bar.wind {{ background: {charts.COLORS["wind"]}; }}
  .bar.pressure {{ background: {charts.COLORS["pressure"]}; }}
  .bar.wave_height {{ background: {charts.COLORS["wave_height"]}; }}
  .chart {{ background: #f0f4f8; border-radius: 20px; padding: 1.5rem; margin-bottom: 2rem; }}
  .chart img {{ width: 100%; }}
</style>
</head>
<body>
<h1>{html_esc(title)}</h1>
<div class="buttons">
{buttons}
</div>
{sections}
<script>
document.querySelectorAll("button[data-view]").forEach(function (btn) {{
  btn.addEventListener("click", function () {{
    document.querySelectorAll("button[data-view]").forEach(function (b) {{
      b.classList.toggle("active", b === btn);
    }});
    document.querySelectorAll("section.view").forEach(function (s) {{
      s.hidden = s.id !== "view-" + btn.dataset.view;
    }});
  }});
}});
</script>
</body>
</html>
'''


def write_dashboard(path, html) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(html, encoding="utf-8")
    return path
