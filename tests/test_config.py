"""Tests for options parsing and configuration files."""

import pytest

from kmedoid import InvalidConfig, KMedoidOptions, parse_options
from kmedoid.config import load_config, validate_config, to_run_config


def test_defaults():
    opts = parse_options()

    assert opts.maxiter == 200
    assert opts.tolfun == 1.0e-8
    assert opts.init == "kmpp"
    assert opts.display == "off"
    assert opts.seed is None
    assert opts.on_degenerate == "reseed"


def test_names_are_case_insensitive_and_aliased():
    opts = parse_options({"MaxIter": 50, "TolFun": 1e-4, "Init": "RAND", "verbosity": "Iter"})

    assert opts.maxiter == 50
    assert opts.tolfun == 1e-4
    assert opts.init == "rand"
    assert opts.display == "iter"


def test_overrides_win():
    base = KMedoidOptions(maxiter=10, init="rand")
    opts = parse_options(base, maxiter=20)

    assert opts.maxiter == 20
    assert opts.init == "rand"
    assert base.maxiter == 10
    assert base.replace(tolfun=0.5).tolfun == 0.5


def test_yaml_quirks_are_normalized():
    assert parse_options({"tolfun": "1e-6"}).tolfun == 1e-6
    assert parse_options({"display": False}).display == "off"


@pytest.mark.parametrize("options", [
    {"nope": 1},
    {"maxiter": "many"},
    {"tolfun": "small"},
    {"tolfun": float("nan")},
    {"seed": 1.5},
    {"on_degenerate": "ignore"},
    {"init": None},
])
def test_bad_options(options):
    with pytest.raises(InvalidConfig):
        parse_options(options)


def test_options_constructor_validates():
    with pytest.raises(InvalidConfig):
        KMedoidOptions(maxiter=-5)
    with pytest.raises(ValueError):
        KMedoidOptions(init="spectral")


def test_load_and_validate_config(tmp_path):
    path = tmp_path / "run.yaml"
    path.write_text(
        "name: demo\n"
        "matrix: costs.npy\n"
        "k: 3\n"
        "options:\n"
        "  init: rand\n"
        "  tolfun: 1e-6\n"
        "  display: off\n"
    )
    config = load_config(str(path))

    assert validate_config(config) == []
    run = to_run_config(config)
    assert run.name == "demo"
    assert run.k == 3
    assert run.seeds is None
    assert parse_options(run.options).display == "off"


def test_validate_config_reports_errors():
    errors = validate_config({"k": 3, "seeds": [0, 1], "options": {"init": "bad"}})

    assert any("matrix" in e for e in errors)
    assert any("'k' or 'seeds'" in e for e in errors)
    assert any("init" in e for e in errors)

    assert validate_config({"matrix": "m.npy"}) == ["Exactly one of 'k' or 'seeds' must be given"]
    assert validate_config([1, 2]) == ["Configuration should be a mapping"]
