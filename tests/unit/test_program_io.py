"""
Program IO Unit Tests
Tests for prover/stdin.py and prover/program.py

Tests:
- typed stdin writes and ordered reads
- stdin exhaustion and type mismatch errors
- the DKIM program commits 160 bytes carrying the verifier result
- cycle accounting is deterministic
"""
import pytest

from core.crypto.dkim import VerificationOutcome
from core.schemas.errors import ErrorCodes, StdinReadError
from core.schemas.public_values import PublicValuesStruct
from prover import program
from prover.stdin import READ_OVERHEAD, ProgramIO, ProverStdin

from fixtures.common import TEST_HEADER, TEST_MAX_HEADERS_LENGTH, make_dkim_stdin


class TestProverStdin:
    """Tests for ProverStdin.write()."""

    def test_write_bytes_and_u32(self):
        stdin = ProverStdin()
        stdin.write(b"abc").write(bytearray(b"de")).write(7)

        assert stdin.values == [b"abc", b"de", 7]
        assert stdin.total_bytes == 3 + 2 + 4

    @pytest.mark.parametrize("value", [-1, 2**32])
    def test_rejects_out_of_range_int(self, value):
        with pytest.raises(ValueError):
            ProverStdin().write(value)

    @pytest.mark.parametrize("value", [True, "text", 1.5, None])
    def test_rejects_other_types(self, value):
        with pytest.raises(TypeError):
            ProverStdin().write(value)

    def test_for_dkim_order(self):
        stdin = ProverStdin.for_dkim(b"k", b"s", b"h", 88)
        assert stdin.values == [b"k", b"s", b"h", 88]


class TestProgramIO:
    """Tests for ProgramIO reads and commits."""

    def test_reads_in_order(self):
        io = ProgramIO(ProverStdin.for_dkim(b"k", b"s", b"h", 88))

        assert io.read_bytes() == b"k"
        assert io.read_bytes() == b"s"
        assert io.read_bytes() == b"h"
        assert io.read_u32() == 88
        assert io.values_read == 4

    def test_read_charges_cycles(self):
        io = ProgramIO(ProverStdin().write(b"abcd"))
        io.read_bytes()

        assert io.cycles == READ_OVERHEAD + 4

    def test_exhausted(self):
        io = ProgramIO(ProverStdin())
        with pytest.raises(StdinReadError) as exc_info:
            io.read_bytes()

        assert exc_info.value.code == ErrorCodes.STDIN_READ_ERROR
        assert exc_info.value.details["position"] == 0

    def test_type_mismatch(self):
        io = ProgramIO(ProverStdin().write(5))
        with pytest.raises(StdinReadError, match="Expected bytes"):
            io.read_bytes()

    def test_commit_slice(self):
        io = ProgramIO(ProverStdin())
        io.commit_slice(b"ab")
        io.commit_slice(b"cd")

        assert io.committed == b"abcd"


class TestProgramMain:
    """Tests for the DKIM program entrypoint."""

    def test_commits_public_values(self, pubkey_der):
        io = ProgramIO(make_dkim_stdin(pubkey=pubkey_der))
        program.main(io)

        decoded = PublicValuesStruct.abi_decode(io.committed)
        assert len(io.committed) == 160
        assert decoded.verified is False
        assert decoded.email_header[:len(TEST_HEADER)] == TEST_HEADER
        assert decoded.max_headers_length == TEST_MAX_HEADERS_LENGTH
        assert decoded.signature == bytes(32)
        assert decoded.pubkey == pubkey_der[:32]

    def test_missing_input(self):
        io = ProgramIO(ProverStdin([b"k", b"s"]))
        with pytest.raises(StdinReadError):
            program.main(io)

    def test_cycles_deterministic(self, pubkey_der):
        counts = set()
        for _ in range(3):
            io = ProgramIO(make_dkim_stdin(pubkey=pubkey_der))
            program.main(io)
            counts.add(io.cycles)
        assert len(counts) == 1

    def test_shape_failure_costs_only_reads(self, pubkey_der):
        stdin = make_dkim_stdin(pubkey=pubkey_der, signature=bytes(16))
        io = ProgramIO(stdin)
        program.main(io)

        reads = 4 * READ_OVERHEAD + stdin.total_bytes
        assert io.cycles == reads + 160

    def test_crypto_path_costs_more(self, pubkey_der):
        cheap = program.estimate_verification_cycles(
            pubkey_der, TEST_HEADER, 88, VerificationOutcome.HEADER_TOO_LONG
        )
        full = program.estimate_verification_cycles(
            pubkey_der, TEST_HEADER, 88, VerificationOutcome.CRYPTO_MISMATCH
        )
        assert cheap == 0
        assert full > 0


class TestProgramIdentity:
    """Tests for program_id()/program_digest()."""

    def test_variants_differ(self):
        assert program.program_id(False) != program.program_id(True)
        assert program.program_digest(False) != program.program_digest(True)

    def test_digest_is_32_bytes(self):
        assert len(program.program_digest()) == 32
