import json

import pytest

from marine_cli import cli

from conftest import NOW, FakeSession, sample


@pytest.fixture
def env(tmp_path):
    return {
        "STORMGLASS_API_KEY": "test-key",
        "MARINE_OUTPUT_DIR": str(tmp_path / "public"),
        "MARINE_FALLBACK_DIR": str(tmp_path / "fallback"),
        "LOG_FILE": str(tmp_path / "logs" / "app.log"),
    }


def write_artifacts(tmp_path):
    public = tmp_path / "public"
    public.mkdir()
    (public / "data-1day.json").write_text(json.dumps({"hours": [
        sample("2025-10-06T12:00:00+00:00", temp=10, wind=5, pressure=1000, wave=1.0),
        sample("2025-10-06T13:00:00+00:00", temp=12, wind=7, pressure=1002, wave=1.5),
    ]}))
    (public / "data-10day.json").write_text(json.dumps({"days": [
        {"date": "2025-10-06", "tempAvg": 11.0, "windAvg": 6.0, "pressureAvg": 1001.0, "waveAvg": 1.25},
    ]}))


def test_missing_credential_exits_1_without_network(env, capsys):
    del env["STORMGLASS_API_KEY"]
    session = FakeSession()
    assert cli.main(["--days", "3"], env=env, session=session) == 1
    assert session.calls == []
    assert "STORMGLASS_API_KEY" in capsys.readouterr().err


def test_fetch_exits_0_even_when_everything_fails(env, tmp_path):
    session = FakeSession()  # every call returns {"hours": []}
    assert cli.main(["--days", "2"], env=env, session=session) == 0
    assert len(session.calls) == 2
    assert not (tmp_path / "public" / "data-10day.json").exists()


def test_days_flag(env, tmp_path, monkeypatch):
    seen = {}
    monkeypatch.setattr(cli.fetcher, "run", lambda config, days, session=None: seen.update(days=days))
    cli.main(["--days", "4"], env=env)
    assert seen["days"] == 4
    cli.main(["fetch", "--days", "7"], env=env)
    assert seen["days"] == 7
    cli.main([], env=env)
    assert seen["days"] == 10


def test_days_must_be_positive(env):
    with pytest.raises(SystemExit):
        cli.main(["--days", "0"], env=env)


def test_view_prints_table_and_writes_charts(env, tmp_path, capsys):
    write_artifacts(tmp_path)
    charts_dir = tmp_path / "results"
    assert cli.main(["view", "--view", "shortRange", "--charts-dir", str(charts_dir), "--cover"], env=env) == 0

    out = capsys.readouterr().out
    assert "Mon 14:00" in out
    assert (charts_dir / "shortRange_temp_wind.png").exists()
    assert (charts_dir / "shortRange_pressure_waves.png").exists()
    assert (charts_dir / "shortRange_cover.png").exists()


def test_view_without_artifacts_shows_no_data(env, tmp_path, capsys):
    assert cli.main(["view", "--view", "multiDay", "--charts-dir", str(tmp_path / "r")], env=env) == 0
    assert "(no data)" in capsys.readouterr().out


def test_dashboard_command(env, tmp_path):
    write_artifacts(tmp_path)
    assert cli.main(["dashboard"], env=env) == 0
    html = (tmp_path / "public" / "index.html").read_text()
    assert "Mon 6" in html
    assert "Mon 14:00" in html


def test_export_command(env, tmp_path):
    write_artifacts(tmp_path)
    out = tmp_path / "csv"
    assert cli.main(["export", "--out-dir", str(out)], env=env) == 0
    assert (out / "hourly.csv").read_text().splitlines()[0] == "time,temp_c,wind_speed,pressure,wave_height"
    assert (out / "daily.csv").read_text().splitlines()[1] == "2025-10-06,11.0,6.0,1001.0,1.25"


def test_fetch_then_view_end_to_end(env, tmp_path, monkeypatch, capsys):
    hours = {"hours": [sample(NOW.isoformat(), temp=10, wind=5, pressure=1000, wave=1.0),
                       sample(NOW.replace(hour=10).isoformat(), temp=12, wind=7, pressure=1002, wave=1.5)]}
    session = FakeSession(hours, hours)
    original_run = cli.fetcher.run
    monkeypatch.setattr(cli.fetcher, "run",
                        lambda config, days, session=None: original_run(config, days, session=session, now=NOW))

    assert cli.main(["--days", "1"], env=env, session=session) == 0
    capsys.readouterr()
    cli.main(["view", "--view", "multiDay", "--charts-dir", str(tmp_path / "r")], env=env)
    assert "11 °C" in capsys.readouterr().out


def test_malformed_upstream_reading_still_exits_0(env, tmp_path):
    hours = {"hours": [{"time": NOW.isoformat(), "airTemperature": {"noaa": {"value": 3}}}]}
    session = FakeSession(hours, hours)
    assert cli.main(["--days", "1"], env=env, session=session) == 0
    assert (tmp_path / "public" / "data-10day.json").exists()


def test_fetch_leaves_no_chart_directories(env, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert cli.main(["--days", "1"], env=env, session=FakeSession()) == 0
    assert not (tmp_path / "results").exists()
