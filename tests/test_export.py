import os

import pytest

from layered_config import ConfigLoader, MemoryEnvironment, ProcessEnvironment
from layered_config import environment


def test_export_writes_environment_and_constants(loader, memory_env):
    loader.from_dict({"VAL1": "1", "VAL2": 2, "FLAG": True, "NONE": None, "NESTED": {"a": [1]}})
    loader.export()
    assert memory_env.environ == {
        "VAL1": "1",
        "VAL2": "2",
        "FLAG": "true",
        "NONE": "",
        "NESTED": '{"a":[1]}',
    }
    assert memory_env.constants["VAL2"] == 2
    assert memory_env.constants["FLAG"] is True


def test_export_without_overwrite_keeps_existing_variables():
    sink = MemoryEnvironment({"VAL1": "from-env"})
    loader = ConfigLoader({"VAL1": "from-config", "VAL2": "2"}, environment=sink)
    loader.export()
    assert sink.environ["VAL1"] == "from-env"
    assert "VAL1" not in sink.constants
    assert sink.environ["VAL2"] == "2"


def test_export_overwrite(loader, memory_env):
    loader.set("VAL1", "1")
    loader.export()
    loader.set("VAL1", "overwrite")
    loader.export()
    assert memory_env.environ["VAL1"] == "1"

    loader.export(overwrite=True)
    assert memory_env.environ["VAL1"] == "overwrite"
    # constants are defined once
    assert memory_env.constants["VAL1"] == "1"


def test_from_environment(memory_env, loader):
    memory_env.environ.update({"PORT": "8080", "DEBUG": "true", "some.dotted": "x"})
    loader.from_environment()
    assert loader.get("PORT") == 8080
    assert loader.get("DEBUG") is True
    assert loader.get("some.dotted") == "x"


def test_from_environment_only_existing(memory_env):
    memory_env.environ.update({"PORT": "9000", "OTHER": "ignored"})
    loader = ConfigLoader({"PORT": 80}, environment=memory_env)
    loader.from_environment(only_existing=True)
    assert loader.to_dict() == {"PORT": 9000}


@pytest.fixture
def process_env(monkeypatch):
    monkeypatch.setattr(environment, "_DEFINED_CONSTANTS", {})
    monkeypatch.delenv("LAYERED_CONFIG_TEST_A", raising=False)
    monkeypatch.setenv("LAYERED_CONFIG_TEST_B", "preset")
    yield ProcessEnvironment()
    os.environ.pop("LAYERED_CONFIG_TEST_A", None)


def test_process_environment_export(process_env):
    loader = ConfigLoader(
        {"LAYERED_CONFIG_TEST_A": 5, "LAYERED_CONFIG_TEST_B": "mine"},
        environment=process_env,
    )
    loader.export()
    assert os.environ["LAYERED_CONFIG_TEST_A"] == "5"
    assert os.environ["LAYERED_CONFIG_TEST_B"] == "preset"
    assert environment.constant("LAYERED_CONFIG_TEST_A") == 5
    assert "LAYERED_CONFIG_TEST_B" not in environment.defined_constants()

    loader.set("LAYERED_CONFIG_TEST_A", 6)
    loader.export(overwrite=True)
    assert os.environ["LAYERED_CONFIG_TEST_A"] == "6"
    assert environment.constant("LAYERED_CONFIG_TEST_A") == 5


def test_process_environment_is_a_readable_source(process_env):
    loader = ConfigLoader(environment=process_env)
    loader.from_environment()
    assert loader.get("LAYERED_CONFIG_TEST_B") == "preset"


def test_constants_are_defined_once(process_env):
    assert process_env.set_if_absent("NAME", 1) is True
    assert process_env.set_if_absent("NAME", 2) is False
    assert environment.constant("NAME") == 1
    assert process_env.exists("NAME")


def test_process_export_skips_names_the_environment_cannot_hold(process_env, monkeypatch):
    monkeypatch.setenv("LAYERED_CONFIG_TEST_C", "")
    monkeypatch.delenv("LAYERED_CONFIG_TEST_C")
    loader = ConfigLoader(
        {"LAYERED_CONFIG_TEST_A": 1, "a=b": 2, "": 3, "nul\x00name": 4, "LAYERED_CONFIG_TEST_C": 5},
        environment=process_env,
    )
    loader.export()
    assert os.environ["LAYERED_CONFIG_TEST_A"] == "1"
    assert os.environ["LAYERED_CONFIG_TEST_C"] == "5"
    assert "a=b" not in os.environ
    assert environment.constant("a=b") == 2


def test_process_export_drops_nul_from_values(process_env):
    loader = ConfigLoader({"LAYERED_CONFIG_TEST_A": "x\x00y"}, environment=process_env)
    loader.export()
    assert os.environ["LAYERED_CONFIG_TEST_A"] == "xy"
