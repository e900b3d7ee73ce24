import pytest

from procam.modules.VirtualCamera.core.rotation import (
    clamp_slider,
    display_degrees,
    phase,
    rotation_from_slider,
    slider_position,
    turns,
)


class TestPhaseAndTurns:
    @pytest.mark.parametrize(
        "rotation, expected_phase, expected_turns",
        [
            (0, 0, 0),
            (90, 90, 0),
            (270, -90, 1),
            (-270, 90, -1),
            (725, 5, 2),
            (180, -180, 1),
        ],
    )
    def test_decomposition(self, rotation, expected_phase, expected_turns):
        assert phase(rotation) == pytest.approx(expected_phase)
        assert turns(rotation) == expected_turns
        assert turns(rotation) * 360 + phase(rotation) == pytest.approx(rotation)


class TestSlider:
    def test_slider_keeps_accumulated_turns(self):
        assert rotation_from_slider(270, 10) == pytest.approx(370)

    def test_slider_without_turns(self):
        assert rotation_from_slider(45, -30) == pytest.approx(-30)

    def test_slider_value_is_clamped(self):
        assert clamp_slider(200) == 180
        assert clamp_slider(-500) == -180
        assert rotation_from_slider(0, 400) == pytest.approx(180)

    def test_slider_position_matches_phase(self):
        assert slider_position(370) == pytest.approx(10)
        assert slider_position(-90) == pytest.approx(-90)


class TestDisplayDegrees:
    def test_sign_follows_rotation(self):
        assert display_degrees(450) == 90
        assert display_degrees(-450) == -90

    def test_rounds(self):
        assert display_degrees(12.6) == 13
