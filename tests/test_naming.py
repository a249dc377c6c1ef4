"""
Tests for identifier naming — type, snake and constant names.
"""

import pytest

from gdgen.core.services.naming import (
    codepoint_name,
    constant_name,
    group_type_name,
    snake_case,
    words,
)


class TestGroupTypeName:
    """Tests for group_type_name()."""

    @pytest.mark.parametrize(
        "group, expected",
        [
            ("2d_physics", "Physics2d"),
            ("3d_physics", "Physics3d"),
            ("2d_render", "Render2d"),
            ("3d_render", "Render3d"),
            ("2d_navigation", "Navigation2d"),
            ("3d_navigation", "Navigation3d"),
            ("avoidance", "Avoidance"),
            ("myGroup", "MyGroup"),
            ("my-custom group", "MyCustomGroup"),
            ("2d", "Group2d"),
            ("", "Group"),
            ("___", "Group"),
        ],
    )
    def test_type_names(self, group: str, expected: str):
        assert group_type_name(group) == expected

    def test_distinct_groups_can_collide(self):
        assert group_type_name("2d_physics") == group_type_name("physics_2d")

    def test_never_starts_with_digit(self):
        for group in ("1", "12_34", "9lives", "_0"):
            assert not group_type_name(group)[0].isdigit()


class TestSnakeCase:
    """Tests for snake_case()."""

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("MoveLeft", "move_left"),
            ("ui_accept", "ui_accept"),
            ("HTTPRequest", "http_request"),
            ("Jump 2", "jump_2"),
            ("layer2D", "layer_2_d"),
            ("non colliding", "non_colliding"),
            ("already_snake", "already_snake"),
            ("--", ""),
        ],
    )
    def test_snake(self, name: str, expected: str):
        assert snake_case(name) == expected

    def test_words_split_camel_and_separators(self):
        assert words("player-OneJump") == ["player", "One", "Jump"]


class TestConstantName:
    """Tests for constant_name()."""

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("jump", "JUMP"),
            ("MoveLeft", "MOVE_LEFT"),
            ("ui_accept", "UI_ACCEPT"),
            ("non colliding", "NON_COLLIDING"),
            ("2player", "_2_PLAYER"),
            ("", "UNNAMED"),
            ("!!", "U0021_0021"),
        ],
    )
    def test_constants(self, name: str, expected: str):
        assert constant_name(name) == expected

    def test_case_variants_collide(self):
        assert constant_name("MoveLeft") == constant_name("move_left")

    def test_fallback_for_names_without_letters(self):
        assert constant_name("!!", fallback="LAYER_3") == "LAYER_3"
        assert constant_name("jump", fallback="LAYER_3") == "JUMP"

    def test_never_bare_underscore(self):
        for name in ("", "_", "!!", "--", "²", "🔥"):
            result = constant_name(name)
            assert result.strip("_")
            assert ("_" + result).isidentifier()


class TestNonAsciiNames:
    """Letters from any script survive into identifiers."""

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("壁", "壁"),
            ("свет", "СВЕТ"),
            ("Ébauche", "ÉBAUCHE"),
            ("Größe", "GRÖSSE"),
            ("mur_壁", "MUR_壁"),
            ("Ключ2", "КЛЮЧ_2"),
        ],
    )
    def test_constants(self, name: str, expected: str):
        assert constant_name(name) == expected

    def test_distinct_scripts_do_not_collide(self):
        assert constant_name("壁") != constant_name("свет")

    def test_camel_case_in_other_scripts(self):
        assert snake_case("ÉcranPrincipal") == "écran_principal"

    def test_group_type_name(self):
        assert group_type_name("2d_стены") == "Стены2d"

    def test_superscript_digits_dropped(self):
        assert words("x²") == ["x"]

    def test_codepoint_name(self):
        assert codepoint_name("!?") == "U0021_003F"
        assert codepoint_name("") == "UNNAMED"
