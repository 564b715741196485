import json

import pytest

from vdf_beacon.errors import EncodingError
from vdf_beacon.types.core import ProofResult, VDFProofRecord, VerifyReport


def _record(**over):
    base = dict(x=0x1234ABCD, y=0xABC, iterations=2**20, delta=9, proof=(0, 0x0F, 0x1234), modulus=0xC196)
    base.update(over)
    return VDFProofRecord(**base)


def test_proof_result_unpacks():
    y, proof = ProofResult(y=5, proof=(1, 2))
    assert y == 5 and proof == (1, 2)
    assert ProofResult(y=1).proof == ()


def test_verify_report_truthiness():
    assert VerifyReport(True, "ok")
    assert not VerifyReport(False, "equation_mismatch")


def test_to_dict_uses_minimal_even_hex():
    d = _record().to_dict()
    assert d == {
        "x": "0x1234abcd",
        "y": "0x0abc",
        "modulus": "0xc196",
        "iterations": 1048576,
        "delta": 9,
        "proof": ["0x00", "0x0f", "0x1234"],
    }


def test_json_round_trip():
    rec = _record()
    assert VDFProofRecord.from_json(rec.to_json()) == rec


def test_from_dict_accepts_mixed_int_forms():
    rec = VDFProofRecord.from_dict({
        "x": 305441741,
        "y": "0xabc",
        "modulus": "49558",
        "iterations": "1048576",
        "delta": 9,
        "proof": ["0x00", 15, "0x1234"],
    })
    assert rec == _record(modulus=49558)


def test_from_dict_nested_proof_object():
    rec = VDFProofRecord.from_dict({
        "x": "0x1234abcd",
        "modulus": "0xc196",
        "iterations": 1048576,
        "delta": 9,
        "proof": {"y": "0x0abc", "proof": ["0x00", "0x0f", "0x1234"]},
    })
    assert rec == _record()


def test_proof_list_is_stored_as_tuple():
    rec = _record(proof=[1, 2, 3])
    assert rec.proof == (1, 2, 3)
    assert hash(rec) == hash(_record(proof=(1, 2, 3)))


@pytest.mark.parametrize(
    "mutate",
    [
        lambda d: d.pop("y"),
        lambda d: d.pop("proof"),
        lambda d: d.update(proof="0x1234"),
        lambda d: d.update(x="0xzz"),
        lambda d: d.update(delta=-1),
        lambda d: d.update(iterations=None),
    ],
)
def test_from_dict_rejects_malformed(mutate):
    d = _record().to_dict()
    mutate(d)
    with pytest.raises(EncodingError):
        VDFProofRecord.from_dict(d)


def test_from_json_rejects_non_object_and_bad_json():
    with pytest.raises(EncodingError):
        VDFProofRecord.from_json("[1, 2, 3]")
    with pytest.raises(EncodingError):
        VDFProofRecord.from_json("{")


def test_constructor_type_checks():
    with pytest.raises(TypeError):
        _record(x="0x01")
    with pytest.raises(TypeError):
        _record(proof=(1, True))
    with pytest.raises(ValueError):
        _record(y=-1)


def test_to_solidity_fixture():
    text = _record().to_solidity()
    lines = text.splitlines()
    assert lines[0] == "// Solidity format:"
    assert '  bytes memory x = hex"1234abcd";' in lines
    assert '  bytes memory y = hex"0abc";' in lines
    assert '  bytes memory N = hex"c196";' in lines
    assert "  uint256 T = 1048576;" in lines
    assert "  uint256 delta = 9;" in lines
    assert "  bytes[] memory proof = new bytes[](3);" in lines
    assert lines[-3:] == [
        "  proof[0] = hex'00';",
        "  proof[1] = hex'0f';",
        "  proof[2] = hex'1234';",
    ]
    assert text.endswith("\n")


def test_to_json_is_valid_json():
    assert json.loads(_record().to_json())["proof"][2] == "0x1234"
