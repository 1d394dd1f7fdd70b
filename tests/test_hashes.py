"""Tests for hash selection, digest folding and round iteration."""

import pytest

from skey.errors import InvalidRoundCount, UnknownHashAlgorithm
from skey.hashes import DEFAULT_ALGORITHM, HashAlgorithm, fold, iterate


class TestHashAlgorithm:
    def test_from_token(self):
        assert HashAlgorithm.from_token("otp-md4") is HashAlgorithm.MD4
        assert HashAlgorithm.from_token("otp-md5") is HashAlgorithm.MD5
        assert HashAlgorithm.from_token("otp-sha1") is HashAlgorithm.SHA1

    def test_from_token_case_insensitive(self):
        assert HashAlgorithm.from_token("OTP-SHA1") is HashAlgorithm.SHA1

    @pytest.mark.parametrize("token", ["otp-bogus", "md5", "sha1", "otp-", "", "otp-sha256"])
    def test_unknown_token(self, token):
        with pytest.raises(UnknownHashAlgorithm) as exc_info:
            HashAlgorithm.from_token(token)
        assert exc_info.value.token == token

    def test_tokens(self):
        assert HashAlgorithm.tokens() == ["otp-md4", "otp-md5", "otp-sha1"]

    def test_default_is_md5(self):
        assert DEFAULT_ALGORITHM is HashAlgorithm.MD5

    def test_digest_sizes(self):
        assert HashAlgorithm.MD4.digest_size == 16
        assert HashAlgorithm.MD5.digest_size == 16
        assert HashAlgorithm.SHA1.digest_size == 20

    def test_known_digests(self):
        """Digests of the empty string match the published values."""
        assert HashAlgorithm.MD4.digest(b"").hex() == "31d6cfe0d16ae931b73c59d7e0c089c0"
        assert HashAlgorithm.MD5.digest(b"").hex() == "d41d8cd98f00b204e9800998ecf8427e"
        assert (
            HashAlgorithm.SHA1.digest(b"").hex()
            == "da39a3ee5e6b4b0d3255bfef95601890afd80709"
        )


class TestFold:
    def test_sixteen_byte_fold(self):
        """Bytes 8-15 are XORed into bytes 0-7."""
        assert fold(HashAlgorithm.MD5, bytes(range(16))) == b"\x08" * 8
        assert fold(HashAlgorithm.MD4, bytes(range(16))) == b"\x08" * 8

    def test_sha1_fold_reverses_groups(self):
        """SHA1 folds 20 bytes then reverses each group of four."""
        folded = fold(HashAlgorithm.SHA1, bytes(range(20)))
        assert folded == bytes([27, 26, 25, 24, 8, 8, 8, 8])

    def test_group_reversal_only_for_sha1(self):
        """The same 20 bytes folded for another algorithm are not reordered."""
        folded = fold(HashAlgorithm.MD5, bytes(range(20)))
        assert folded == bytes([24, 25, 26, 27, 8, 8, 8, 8])

    def test_eight_bytes_unchanged(self):
        value = bytes.fromhex("0123456789abcdef")
        assert fold(HashAlgorithm.MD5, value) == value

    def test_short_digest_rejected(self):
        with pytest.raises(ValueError, match="at least 8 bytes"):
            fold(HashAlgorithm.MD5, bytes(7))

    def test_output_is_eight_bytes(self):
        for algorithm in HashAlgorithm:
            assert len(fold(algorithm, algorithm.digest(b"seed"))) == 8


class TestIterate:
    def test_single_iteration(self):
        data = b"testThis is a test."
        expected = fold(HashAlgorithm.MD5, HashAlgorithm.MD5.digest(data))
        assert iterate(HashAlgorithm.MD5, 1, data) == expected

    def test_later_iterations_hash_folded_value(self):
        data = b"testThis is a test."
        first = iterate(HashAlgorithm.SHA1, 1, data)
        second = fold(HashAlgorithm.SHA1, HashAlgorithm.SHA1.digest(first))
        assert iterate(HashAlgorithm.SHA1, 2, data) == second

    def test_rfc_value(self):
        """RFC 2289 MD5 vector, sequence 0."""
        assert iterate(HashAlgorithm.MD5, 1, b"testThis is a test.").hex() == "9e876134d90499dd"

    @pytest.mark.parametrize("iterations", [0, -1, "1", 1.0, True])
    def test_invalid_iterations(self, iterations):
        with pytest.raises(InvalidRoundCount):
            iterate(HashAlgorithm.MD5, iterations, b"data")
