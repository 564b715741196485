import json

import pytest

from vdf_beacon.config import BeaconConfig
from vdf_beacon.constants import REFERENCE_MODULUS_HEX
from vdf_beacon.errors import ConfigError, InvalidParameters
from vdf_beacon.vdf.params import (
    DEVNET,
    REFERENCE,
    VDFParams,
    check_delay,
    from_dict,
    get_params,
    profile_names,
    tau_of,
)


# ---------- params ----------


def test_reference_profile_shape():
    assert REFERENCE.modulus_bitlen == 1028
    assert REFERENCE.modulus_bytelen == 129
    assert REFERENCE.tau == 20
    assert REFERENCE.proof_length == 11
    REFERENCE.validate()
    DEVNET.validate()
    assert DEVNET.proof_length == 12 - 3


def test_tau_is_exact_floor_log2():
    assert tau_of(1) == 0
    assert tau_of(2) == 1
    assert tau_of(2**20) == 20
    assert tau_of(2**20 + 1) == 20
    assert tau_of(2**53 + 1) == 53


def test_check_delay_bounds():
    assert check_delay(2**10, 0) == 10
    assert check_delay(2**10, 9) == 10
    for t, d in [(2**10, 10), (2**10, -1), (0, 0), (3 * 2**8, 1), (1, 0)]:
        with pytest.raises(InvalidParameters):
            check_delay(t, d)


def test_get_params_profiles_and_unknown():
    assert profile_names() == ["devnet", "reference"]
    assert get_params("devnet", env={}) == DEVNET
    assert get_params(env={}) == REFERENCE
    assert get_params(env={"VDF_PROFILE": "devnet"}) == DEVNET
    with pytest.raises(InvalidParameters) as ei:
        get_params("mainnet", env={})
    assert ei.value.name == "profile"


def test_get_params_env_overrides():
    p = get_params("devnet", env={"VDF_ITERATIONS": "0x2000", "VDF_DELTA": "5"})
    assert (p.iterations, p.delta, p.name) == (2**13, 5, "devnet")
    assert p.modulus_hex == REFERENCE_MODULUS_HEX


def test_get_params_env_overrides_validated():
    with pytest.raises(InvalidParameters):
        get_params("devnet", env={"VDF_DELTA": "12"})
    with pytest.raises(InvalidParameters) as ei:
        get_params("devnet", env={"VDF_ITERATIONS": "lots"})
    assert ei.value.name == "VDF_ITERATIONS"


def test_get_params_reads_process_environment(clean_vdf_env):
    clean_vdf_env.setenv("VDF_PROFILE", "devnet")
    clean_vdf_env.setenv("VDF_DELTA", "4")
    p = get_params()
    assert p.name == "devnet" and p.delta == 4


def test_validate_rejects_bad_moduli():
    small = VDFParams("x", 2**10, 2, format((2**61 - 1) * (2**89 - 1), "x"))
    with pytest.raises(InvalidParameters):
        small.validate()
    even = VDFParams("x", 2**10, 2, REFERENCE_MODULUS_HEX[:-1] + "0")
    with pytest.raises(InvalidParameters):
        even.validate()
    too_wide = VDFParams("x", 2**10, 2, "f" * (2 * 129 + 2))
    with pytest.raises(InvalidParameters) as ei:
        too_wide.validate()
    assert "129" in ei.value.reason
    with pytest.raises(InvalidParameters):
        VDFParams("x", 2**10, 2, "not-hex").validate()


def test_from_dict_falls_back_to_named_profile():
    p = from_dict({"name": "devnet", "delta": 2})
    assert p.iterations == DEVNET.iterations and p.delta == 2
    p = from_dict({"iterations": 2**16, "delta": 1, "modulus_hex": "0x" + REFERENCE_MODULUS_HEX})
    assert p.modulus_hex == REFERENCE_MODULUS_HEX
    assert p.name == "reference"


def test_params_to_dict():
    d = DEVNET.to_dict()
    assert d["name"] == "devnet"
    assert d["tau"] == 12 and d["proof_length"] == 9
    assert d["modulus_bits"] == 1028


# ---------- BeaconConfig ----------


def test_config_defaults():
    cfg = BeaconConfig()
    cfg.validate()
    assert cfg.vdf == REFERENCE
    assert cfg.log_level == "INFO"
    assert cfg.metrics_textfile is None


def test_config_from_env_mapping():
    cfg = BeaconConfig.from_env(env={
        "VDF_BEACON_PROFILE": "devnet",
        "VDF_BEACON_DELTA": "2",
        "VDF_BEACON_LOG_LEVEL": "debug",
        "VDF_BEACON_METRICS_TEXTFILE": "/tmp/vdf.prom",
        "VDF_DELTA": "7",  # unprefixed keys are not read
    })
    assert cfg.vdf.name == "devnet" and cfg.vdf.delta == 2
    assert cfg.log_level == "DEBUG"
    assert cfg.metrics_textfile == "/tmp/vdf.prom"


def test_config_from_env_custom_prefix():
    cfg = BeaconConfig.from_env(prefix="APP_", env={"APP_PROFILE": "devnet"})
    assert cfg.vdf == DEVNET


def test_config_from_env_errors_are_config_errors():
    with pytest.raises(ConfigError):
        BeaconConfig.from_env(env={"VDF_BEACON_PROFILE": "nope"})
    with pytest.raises(ConfigError):
        BeaconConfig.from_env(env={"VDF_BEACON_LOG_LEVEL": "LOUD"})


def test_config_from_json_file(tmp_path):
    path = tmp_path / "beacon.json"
    path.write_text(json.dumps({"log_level": "warning", "vdf": {"name": "devnet", "delta": 1}}))
    cfg = BeaconConfig.from_file(str(path))
    assert cfg.log_level == "WARNING"
    assert cfg.vdf.iterations == DEVNET.iterations and cfg.vdf.delta == 1


def test_config_from_yaml_file(tmp_path):
    path = tmp_path / "beacon.yaml"
    path.write_text(
        "log_level: DEBUG\n"
        "metrics_textfile: out.prom\n"
        "vdf:\n"
        "  name: custom\n"
        "  iterations: 65536\n"
        "  delta: 4\n"
        f"  modulus_hex: \"{REFERENCE_MODULUS_HEX}\"\n"
    )
    cfg = BeaconConfig.from_file(str(path))
    assert cfg.vdf.name == "custom"
    assert cfg.vdf.iterations == 65536 and cfg.vdf.delta == 4
    assert cfg.metrics_textfile == "out.prom"
    # round-trips through to_dict/from_file
    again = tmp_path / "again.json"
    again.write_text(cfg.to_json())
    assert BeaconConfig.from_file(str(again)) == cfg


def test_config_from_empty_yaml_uses_defaults(tmp_path):
    path = tmp_path / "empty.yml"
    path.write_text("")
    assert BeaconConfig.from_file(str(path)).vdf == REFERENCE


@pytest.mark.parametrize(
    "name, text",
    [
        ("bad.json", "{not json"),
        ("bad.yaml", "vdf: [unclosed"),
        ("list.json", "[1, 2]"),
        ("vdf.json", '{"vdf": 5}'),
        ("delta.json", '{"vdf": {"delta": 40}}'),
        ("iters.json", '{"vdf": {"iterations": null}}'),
    ],
)
def test_config_from_file_errors(tmp_path, name, text):
    path = tmp_path / name
    path.write_text(text)
    with pytest.raises(ConfigError):
        BeaconConfig.from_file(str(path))


def test_config_missing_file(tmp_path):
    with pytest.raises(ConfigError):
        BeaconConfig.from_file(str(tmp_path / "missing.json"))


def test_with_vdf_validates():
    cfg = BeaconConfig().with_vdf(delta=3)
    assert cfg.vdf.delta == 3
    with pytest.raises(ConfigError):
        BeaconConfig().with_vdf(iterations=1000)
