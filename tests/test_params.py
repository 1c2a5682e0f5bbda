import threading

import pytest

from pyrequests.http.params import URLParam, percent_encode


def test_encoded_string_percent_encodes_space() -> None:
    param = URLParam()
    param.add("q", "a b")

    assert param.encoded_string() == "q=a%20b"


def test_duplicate_value_is_ignored() -> None:
    param = URLParam()
    param.add("q", "x")
    param.add("q", "x")

    assert param.get_set("q") == ["x"]
    assert param.raw_string() == "q=x"


def test_multi_values_keep_insertion_order() -> None:
    param = URLParam()
    param.add("k", "2")
    param.add("a", "z")
    param.add("k", "1")

    assert param.get("k") == "2"
    assert param.raw_string() == "k=2&k=1&a=z"
    assert list(param) == ["k", "a"]


def test_remove_last_value_removes_key() -> None:
    param = URLParam()
    param.add("k", "v")

    assert param.remove("k", "v") is True
    assert "k" not in param
    assert param.get("k") is None
    assert param.encoded_string() == ""


def test_remove_one_of_many_values() -> None:
    param = URLParam()
    for value in ("a", "b", "c"):
        param.add("k", value)

    assert param.remove("k", "b") is True
    assert param.remove("k", "missing") is False
    assert param.get_set("k") == ["a", "c"]


def test_remove_whole_key() -> None:
    param = URLParam()
    param.add("k", "a")
    param.add("k", "b")

    assert param.remove("k") is True
    assert param.remove("k") is False
    assert param.remove("other", "x") is False
    assert len(param) == 0


def test_encoding_is_utf8_and_covers_keys() -> None:
    param = URLParam()
    param.add("名", "值&=/")

    assert param.encoded_string() == "%E5%90%8D=%E5%80%BC%26%3D%2F"
    assert param.raw_string() == "名=值&=/"


def test_percent_encode_keeps_unreserved() -> None:
    assert percent_encode("AZaz09-._~") == "AZaz09-._~"


def test_print(capsys: pytest.CaptureFixture[str]) -> None:
    param = URLParam()
    param.add("a", "1")
    param.add("a", "2")
    param.print()

    assert capsys.readouterr().out == "Param:\na: 1\na: 2\n"


def test_concurrent_adds_are_not_lost() -> None:
    param = URLParam()

    def worker(offset: int) -> None:
        for i in range(200):
            param.add("k", str(offset * 1000 + i))

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(param.get_set("k")) == 800
