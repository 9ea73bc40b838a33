import pytest

from apps.common.codes import generate_unique_code, order_code


def test_order_code_shape():
    code = order_code(exists=lambda c: False, now_ms=1736000012345678)
    prefix, stamp, suffix = code.split("-")
    assert prefix == "ORD"
    assert stamp == "12345678"
    assert len(suffix) == 4 and suffix.isalnum() and suffix.upper() == suffix


def test_order_code_skips_taken_codes():
    taken = set()

    def exists(code):
        if not taken:
            taken.add(code)
            return True
        return code in taken

    code = order_code(exists=exists, now_ms=99)
    assert code not in taken
    assert code.startswith("ORD-99-")


def test_generate_unique_code_gives_up():
    with pytest.raises(RuntimeError):
        generate_unique_code(exists=lambda c: True, max_attempts=3)
