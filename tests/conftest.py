"""
Shared test fixtures — a small Godot project on disk.
"""

import textwrap
from pathlib import Path

import pytest

PROJECT_GODOT = textwrap.dedent("""\
    ; Engine configuration file.
    ; It's best edited using the editor UI and not directly,
    ; since the parameters that go here are not all obvious.

    config_version=5

    [application]

    config/name="Demo"
    config/features=PackedStringArray("4.2", "Forward Plus")

    [input]

    jump={
    "deadzone": 0.5,
    "events": [Object(InputEventKey,"resource_local_to_scene":false,"resource_name":"","device":-1,"window_id":0,"alt_pressed":false,"shift_pressed":false,"ctrl_pressed":false,"meta_pressed":false,"pressed":false,"keycode":0,"physical_keycode":32,"key_label":0,"unicode":32,"echo":false,"script":null)
    , Object(InputEventJoypadButton,"resource_local_to_scene":false,"resource_name":"","device":-1,"button_index":0,"pressure":0.0,"pressed":true,"script":null)
    ]
    }
    fire={
    "deadzone": 0.5,
    "events": [Object(InputEventMouseButton,"resource_local_to_scene":false,"resource_name":"","device":-1,"window_id":0,"alt_pressed":false,"shift_pressed":false,"ctrl_pressed":true,"meta_pressed":false,"button_mask":0,"position":Vector2(0, 0),"global_position":Vector2(0, 0),"factor":1.0,"button_index":1,"canceled":false,"pressed":true,"double_click":false,"script":null)
    ]
    }
    MoveLeft={
    "deadzone": 0.5,
    "events": []
    }

    [layer_names]

    2d_physics/layer_1="collisions"
    2d_physics/layer_2="non colliding"
    3d_render/layer_1="world"
    avoidance/layer_3="crowd"
""")

MANIFEST = textwrap.dedent("""\
    [configuration]
    entry_symbol = "gdext_rust_init"
    compatibility_minimum = 4.1
    reloadable = true

    [libraries]
    linux.debug.x86_64 = "res://../rust/target/debug/libdemo.so"
""")


@pytest.fixture
def project_text() -> str:
    """Content of a representative Godot 4 project.godot."""
    return PROJECT_GODOT


@pytest.fixture
def godot_dir(tmp_path: Path) -> Path:
    """A Godot resource root with project.godot, scenes and a manifest."""
    root = tmp_path / "godot"
    root.mkdir()
    (root / "project.godot").write_text(PROJECT_GODOT, encoding="utf-8")
    (root / "demo.gdextension").write_text(MANIFEST, encoding="utf-8")

    (root / "Main.tscn").write_text("[gd_scene format=3]\n")
    (root / "levels").mkdir()
    (root / "levels" / "LevelOne.tscn").write_text("[gd_scene format=3]\n")
    (root / "multiplayer").mkdir()
    (root / "multiplayer" / "Main.tscn").write_text("[gd_scene format=3]\n")
    (root / "icons").mkdir()
    (root / "icons" / "Menu.svg").write_text("<svg/>\n")
    return root


@pytest.fixture
def rust_dir(tmp_path: Path) -> Path:
    """A Rust crate source directory with one icon marker."""
    src = tmp_path / "rust" / "src"
    src.mkdir(parents=True)
    (src / "hud.rs").write_text(
        textwrap.dedent("""\
            use godot::prelude::*;

            #[derive(GodotClass)]
            #[class(init, base=Control)] // gdgen:icon="res://icons/Hud.svg"
            pub struct Hud {
                base: Base<Control>,
            }
        """),
        encoding="utf-8",
    )
    return src


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Where generated Rust files go (not created yet)."""
    return tmp_path / "rust" / "src" / "generated"
