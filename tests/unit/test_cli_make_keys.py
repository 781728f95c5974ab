"""Tests for the key generation command."""

from pathlib import Path

import pytest

from signkit.cli_make_keys import main
from signkit.crypto.key_store import read_key_pair_from_files
from signkit.crypto.signature import sign, verify


class TestMakeKeys:
    """Tests for signkit-make-keys."""

    def test_writes_loadable_pair(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        code = main(
            ["--algorithm", "RSA", "--key-size", "2048", "--out-dir", str(tmp_path)]
        )
        assert code == 0
        printed = capsys.readouterr().out.split()
        out_dir = tmp_path.resolve()
        assert printed == [str(out_dir / "public.pem"), str(out_dir / "private.pem")]

        kp = read_key_pair_from_files(
            tmp_path / "public.pem", tmp_path / "private.pem", "RSA"
        )
        assert verify(b"cli", kp.public_key, sign(b"cli", kp.private_key))

    def test_custom_file_names(self, tmp_path: Path) -> None:
        main(
            [
                "--algorithm", "RSA",
                "--out-dir", str(tmp_path / "nested"),
                "--public-name", "id.pub",
                "--private-name", "id.key",
            ]
        )
        assert (tmp_path / "nested" / "id.pub").exists()
        assert (tmp_path / "nested" / "id.key").exists()

    def test_unsupported_size_exits_nonzero(self, tmp_path: Path) -> None:
        code = main(["--algorithm", "DSA", "--key-size", "4096", "--out-dir", str(tmp_path)])
        assert code == 2
        assert not (tmp_path / "public.pem").exists()

    def test_unknown_algorithm_rejected(self) -> None:
        with pytest.raises(SystemExit):
            main(["--algorithm", "EC"])
