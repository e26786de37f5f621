import os
import sys

import pytest

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from collector.metar.field_parser import parse_metar
from core.models import SkyCover, SkyLayer


def test_parse_metar_full_report() -> None:
    parsed = parse_metar("METAR KXYZ 151851Z 18012KT 10SM 22/14 A2992 FEW040 BKN090")

    assert parsed.wind_dir_degrees == 180
    assert parsed.wind_speed_kt == 12
    assert parsed.visibility_statute_mi == 10
    assert parsed.temp_c == 22
    assert parsed.dewpoint_c == 14
    assert parsed.altim_in_hg == "29.92"
    assert parsed.sky_condition == [
        SkyLayer(SkyCover.FEW, 4000),
        SkyLayer(SkyCover.BKN, 9000),
    ]


def test_parse_metar_empty_and_none() -> None:
    for raw in ("", None, "   "):
        parsed = parse_metar(raw)
        assert parsed.wind_dir_degrees is None
        assert parsed.wind_speed_kt is None
        assert parsed.visibility_statute_mi is None
        assert parsed.temp_c is None
        assert parsed.dewpoint_c is None
        assert parsed.altim_in_hg is None
        assert parsed.sky_condition == []


def test_parse_metar_variable_wind() -> None:
    parsed = parse_metar("CYHU 121500Z VRB05KT 15SM SKC 01/M03 A3002")

    assert parsed.wind_dir_degrees is None
    assert parsed.wind_speed_kt == 5


def test_parse_metar_negative_temperatures() -> None:
    parsed = parse_metar("CYMX 121500Z 31015KT 15SM OVC020 M05/M10 A2988")

    assert parsed.temp_c == -5
    assert parsed.dewpoint_c == -10


def test_parse_metar_missing_dewpoint_keeps_temperature() -> None:
    parsed = parse_metar("CWIZ 121500Z AUTO 27008KT 03/ A3001")

    assert parsed.temp_c == 3
    assert parsed.dewpoint_c is None


def test_parse_metar_fractional_visibility() -> None:
    parsed = parse_metar("CYUL 121500Z 09012KT 1.5SM BR OVC004 02/02 A2975")

    assert parsed.visibility_statute_mi == 1.5


@pytest.mark.parametrize("group", ["NANSM", "INFSM", "1_0SM", "-1SM"])
def test_parse_metar_visibility_rejects_non_decimal_spellings(group) -> None:
    parsed = parse_metar(f"KXYZ 121500Z 18012KT {group} 22/14 A2992")

    assert parsed.visibility_statute_mi is None
    assert parsed.wind_speed_kt == 12
    assert parsed.temp_c == 22
    assert parsed.altim_in_hg == "29.92"


def test_parse_metar_unparseable_groups_do_not_block_others() -> None:
    parsed = parse_metar("CYUL 121500Z ///KT PSM OVC004 A2975")

    assert parsed.wind_dir_degrees is None
    assert parsed.wind_speed_kt is None
    assert parsed.visibility_statute_mi is None
    assert parsed.temp_c is None
    assert parsed.altim_in_hg == "29.75"
    assert parsed.sky_condition == [SkyLayer(SkyCover.OVC, 400)]


def test_parse_metar_three_digit_speed() -> None:
    parsed = parse_metar("KXYZ 121500Z 270105KT 10SM")

    assert parsed.wind_dir_degrees == 270
    assert parsed.wind_speed_kt == 105


def test_parse_metar_first_matching_token_wins() -> None:
    parsed = parse_metar("KXYZ 121500Z 18012KT 27030KT 10SM 3SM 22/14 05/01 A2992 A3010")

    assert parsed.wind_dir_degrees == 180
    assert parsed.wind_speed_kt == 12
    assert parsed.visibility_statute_mi == 10
    assert parsed.temp_c == 22
    assert parsed.altim_in_hg == "29.92"


def test_parse_metar_order_tolerant() -> None:
    parsed = parse_metar("A3001 BKN015 M01/M04 2SM 09010KT CYUL")

    assert parsed.altim_in_hg == "30.01"
    assert parsed.temp_c == -1
    assert parsed.dewpoint_c == -4
    assert parsed.visibility_statute_mi == 2
    assert parsed.wind_dir_degrees == 90
    assert parsed.wind_speed_kt == 10
    assert parsed.sky_condition == [SkyLayer(SkyCover.BKN, 1500)]


def test_parse_metar_sky_layers_keep_order_suffixes_and_duplicates() -> None:
    parsed = parse_metar("KXYZ 121500Z 18012KT 10SM SCT025CB BKN040 BKN040 OVC100TCU VV002 22/14 A2992")

    assert [(layer.sky_cover, layer.cloud_base_ft_agl) for layer in parsed.sky_condition] == [
        (SkyCover.SCT, 2500),
        (SkyCover.BKN, 4000),
        (SkyCover.BKN, 4000),
        (SkyCover.OVC, 10000),
    ]


def test_parse_metar_altimeter_requires_exactly_four_digits() -> None:
    parsed = parse_metar("KXYZ 121500Z A299 A29921 A3000")

    assert parsed.altim_in_hg == "30.00"


def test_parse_metar_carries_report_metadata_and_serializes() -> None:
    parsed = parse_metar("CYUL 122100Z 27010KT 15SM FEW030 M02/M08 A3001", "2024/01/12 21:00")

    assert parsed.raw_text == "CYUL 122100Z 27010KT 15SM FEW030 M02/M08 A3001"
    assert parsed.observation_time == "2024/01/12 21:00"
    assert parsed.to_dict()["sky_condition"] == [{"sky_cover": "FEW", "cloud_base_ft_agl": 3000}]
    assert parsed.to_dict()["altim_in_hg"] == "30.01"
