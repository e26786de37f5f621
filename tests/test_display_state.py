from datetime import datetime
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from collector.metar.field_parser import parse_metar
from core.display import DisplayState, format_observation_time
from core.models import Pirep, TafReport, UTC


def _batch(station: str):
    return {
        "metar": parse_metar(f"{station} 122100Z 27010KT 15SM FEW030 M02/M08 A3001", "2024/01/12 21:00"),
        "taf": TafReport(raw_text=f"TAF {station} 122038Z", issue_time=None),
        "pireps": [Pirep(receive_time=datetime(2024, 1, 12, 21, 5, tzinfo=UTC), raw_text="demo")],
    }


def test_apply_replaces_whole_batch():
    display = DisplayState()

    assert display.apply(1, "CYJN", **_batch("CYJN")) is True
    assert display.station == "CYJN"
    assert display.taf.raw_text == "TAF CYJN 122038Z"
    assert display.metar.temp_c == -2
    assert len(display.pireps) == 1


def test_stale_generation_is_dropped():
    display = DisplayState()
    display.apply(2, "CYHU", **_batch("CYHU"))

    assert display.apply(1, "CYJN", **_batch("CYJN")) is False
    assert display.station == "CYHU"
    assert display.metar.raw_text.startswith("CYHU")
    assert display.applied_generation == 2


def test_loading_tracks_overlapping_refreshes():
    display = DisplayState()
    display.begin_refresh(1)
    display.begin_refresh(2)
    display.end_refresh(1)

    assert display.loading is True

    display.end_refresh(2)
    assert display.loading is False


def test_fail_keeps_previous_data_and_sets_banner():
    display = DisplayState()
    display.apply(1, "CYUL", **_batch("CYUL"))
    display.fail(2, "Erreur lors du chargement des données météo.")

    assert display.station == "CYUL"
    assert display.error == "Erreur lors du chargement des données météo."

    display.begin_refresh(3)
    assert display.error is None


def test_format_observation_time():
    assert format_observation_time(None) == "--"
    assert format_observation_time("2024/01/12 21:00") == "2024-01-12T21:00:00+00:00"
    assert format_observation_time("not a date") == "not a date"


def test_to_dict_shape():
    display = DisplayState()
    display.apply(1, "CYUL", **_batch("CYUL"))
    payload = display.to_dict()

    assert payload["station"] == "CYUL"
    assert payload["metar"]["wind_dir_degrees"] == 270
    assert payload["taf"] == {"raw_text": "TAF CYUL 122038Z", "issue_time": None}
    assert payload["pireps"][0]["receive_time"] == "2024-01-12T21:05:00+00:00"
    assert payload["observation_time_display"] == "2024-01-12T21:00:00+00:00"
    assert payload["loading"] is False
    assert payload["generation"] == 1
