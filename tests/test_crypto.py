import unittest

from cpauth.constants import ID_ALPHABET, ID_LENGTH
from cpauth.crypto import (
    DEFAULT_PARAMETERS,
    ChaumPedersenProver,
    GroupParameters,
    compute_response,
    decode,
    decode_hex,
    derive_commitments,
    encode,
    encode_hex,
    exponentiate,
    random_identifier,
    random_scalar,
    verify_proof,
)
from cpauth.errors import InvalidArgumentError

PARAMS = DEFAULT_PARAMETERS


def _honest_transcript(secret: int, blinding: int, challenge: int):
    y1, y2 = derive_commitments(secret)
    r1 = pow(PARAMS.g, blinding, PARAMS.p)
    r2 = pow(PARAMS.h, blinding, PARAMS.p)
    s = compute_response(secret, blinding, challenge, PARAMS.q)
    return y1, y2, r1, r2, s


class TestGroupParameters(unittest.TestCase):
    def test_default_parameters_are_valid(self) -> None:
        DEFAULT_PARAMETERS.validate()
        self.assertEqual(DEFAULT_PARAMETERS.p.bit_length(), 1024)
        self.assertEqual(DEFAULT_PARAMETERS.q.bit_length(), 160)
        self.assertEqual(DEFAULT_PARAMETERS.byte_length, 128)

    def test_generators_derived_from_small_bases(self) -> None:
        cofactor = (PARAMS.p - 1) // PARAMS.q
        self.assertEqual(PARAMS.g, pow(2, cofactor, PARAMS.p))
        self.assertEqual(PARAMS.h, pow(3, cofactor, PARAMS.p))

    def test_generator_with_wrong_order_rejected(self) -> None:
        broken = GroupParameters(p=PARAMS.p, q=PARAMS.q, g=PARAMS.g, h=2)
        with self.assertRaises(ValueError):
            broken.validate()

    def test_identical_generators_rejected(self) -> None:
        broken = GroupParameters(p=PARAMS.p, q=PARAMS.q, g=PARAMS.g, h=PARAMS.g)
        with self.assertRaises(ValueError):
            broken.validate()

    def test_toy_group(self) -> None:
        # p = 23, q = 11; 4 and 9 are squares and so have order 11.
        GroupParameters(p=23, q=11, g=4, h=9).validate()
        with self.assertRaises(ValueError):
            GroupParameters(p=23, q=7, g=4, h=9).validate()


class TestExponentiate(unittest.TestCase):
    def test_small_values(self) -> None:
        self.assertEqual(exponentiate(4, 13, 497), 445)
        self.assertEqual(exponentiate(2, 10, 1000), 24)

    def test_zero_exponent(self) -> None:
        self.assertEqual(exponentiate(PARAMS.g, 0, PARAMS.p), 1)

    def test_exponent_larger_than_modulus(self) -> None:
        self.assertEqual(exponentiate(3, 100, 7), pow(3, 100 % 6, 7))

    def test_subgroup_order(self) -> None:
        self.assertEqual(exponentiate(PARAMS.g, PARAMS.q, PARAMS.p), 1)
        self.assertEqual(exponentiate(PARAMS.h, PARAMS.q, PARAMS.p), 1)

    def test_negative_exponent_rejected(self) -> None:
        with self.assertRaises(ValueError):
            exponentiate(2, -1, 7)


class TestRandomness(unittest.TestCase):
    def test_random_scalar_range(self) -> None:
        for order in (1, 2, 7, PARAMS.q):
            for _ in range(50):
                value = random_scalar(order)
                self.assertGreaterEqual(value, 0)
                self.assertLess(value, order)

    def test_random_scalar_covers_small_range(self) -> None:
        seen = {random_scalar(3) for _ in range(300)}
        self.assertEqual(seen, {0, 1, 2})

    def test_random_scalar_rejects_empty_range(self) -> None:
        with self.assertRaises(ValueError):
            random_scalar(0)

    def test_random_identifier_alphabet_and_length(self) -> None:
        identifier = random_identifier()
        self.assertEqual(len(identifier), ID_LENGTH)
        self.assertTrue(set(identifier) <= set(ID_ALPHABET))
        self.assertEqual(len(random_identifier(6)), 6)

    def test_random_identifiers_differ(self) -> None:
        identifiers = {random_identifier() for _ in range(200)}
        self.assertEqual(len(identifiers), 200)

    def test_random_identifier_rejects_zero_length(self) -> None:
        with self.assertRaises(ValueError):
            random_identifier(0)


class TestEncoding(unittest.TestCase):
    def test_round_trip(self) -> None:
        for value in (0, 1, 255, 256, 65535, PARAMS.q, PARAMS.p - 1, PARAMS.g, PARAMS.h):
            self.assertEqual(decode(encode(value)), value)

    def test_big_endian_minimal(self) -> None:
        self.assertEqual(encode(0), b"\x00")
        self.assertEqual(encode(1), b"\x01")
        self.assertEqual(encode(256), b"\x01\x00")
        self.assertEqual(len(encode(PARAMS.p)), 128)

    def test_leading_zeros_accepted(self) -> None:
        self.assertEqual(decode(b"\x00\x00\x05"), 5)

    def test_negative_rejected(self) -> None:
        with self.assertRaises(ValueError):
            encode(-1)

    def test_decode_rejects_empty(self) -> None:
        with self.assertRaises(InvalidArgumentError):
            decode(b"")

    def test_decode_rejects_non_bytes(self) -> None:
        with self.assertRaises(InvalidArgumentError):
            decode("0102")  # type: ignore[arg-type]

    def test_decode_rejects_oversized(self) -> None:
        with self.assertRaises(InvalidArgumentError):
            decode(b"\x01" * 129, max_length=128)
        self.assertEqual(decode(b"\x01" * 128, max_length=128), int.from_bytes(b"\x01" * 128, "big"))

    def test_hex_round_trip(self) -> None:
        self.assertEqual(encode_hex(256), "0100")
        self.assertEqual(decode_hex(encode_hex(PARAMS.g)), PARAMS.g)

    def test_decode_hex_rejects_malformed(self) -> None:
        for text in ("xyz", "abc", "", "é0"):
            with self.assertRaises(InvalidArgumentError):
                decode_hex(text)


class TestProof(unittest.TestCase):
    def test_response_in_range(self) -> None:
        s = compute_response(secret=PARAMS.q - 1, blinding=0, challenge=PARAMS.q - 1, order=PARAMS.q)
        self.assertGreaterEqual(s, 0)
        self.assertLess(s, PARAMS.q)
        self.assertEqual(compute_response(5, 3, 2, 11), (3 - 10) % 11)

    def test_completeness(self) -> None:
        cases = [
            (123456789, 42, 7),
            (0, 0, 0),
            (PARAMS.q - 1, PARAMS.q - 1, PARAMS.q - 1),
        ]
        cases += [(random_scalar(PARAMS.q), random_scalar(PARAMS.q), random_scalar(PARAMS.q)) for _ in range(10)]
        for secret, blinding, challenge in cases:
            y1, y2, r1, r2, s = _honest_transcript(secret, blinding, challenge)
            self.assertTrue(
                verify_proof(PARAMS.p, y1, y2, r1, r2, PARAMS.g, PARAMS.h, challenge, s),
                msg=f"secret={secret} blinding={blinding} challenge={challenge}",
            )

    def test_response_mutation_rejected(self) -> None:
        secret, blinding, challenge = 123456789, random_scalar(PARAMS.q), random_scalar(PARAMS.q)
        y1, y2, r1, r2, s = _honest_transcript(secret, blinding, challenge)
        encoded = bytearray(encode(s))
        for index in range(len(encoded)):
            tampered = bytearray(encoded)
            tampered[index] ^= 0x01
            self.assertFalse(
                verify_proof(PARAMS.p, y1, y2, r1, r2, PARAMS.g, PARAMS.h, challenge, decode(bytes(tampered)))
            )

    def test_commitment_and_challenge_mutation_rejected(self) -> None:
        secret, blinding, challenge = 987654321, random_scalar(PARAMS.q), random_scalar(PARAMS.q)
        y1, y2, r1, r2, s = _honest_transcript(secret, blinding, challenge)

        def mutations(value: int):
            encoded = encode(value)
            for index in range(len(encoded)):
                tampered = bytearray(encoded)
                tampered[index] ^= 0x80
                yield decode(bytes(tampered))

        for bad_r1 in mutations(r1):
            self.assertFalse(verify_proof(PARAMS.p, y1, y2, bad_r1, r2, PARAMS.g, PARAMS.h, challenge, s))
        for bad_r2 in mutations(r2):
            self.assertFalse(verify_proof(PARAMS.p, y1, y2, r1, bad_r2, PARAMS.g, PARAMS.h, challenge, s))
        for bad_challenge in mutations(challenge):
            self.assertFalse(
                verify_proof(PARAMS.p, y1, y2, r1, r2, PARAMS.g, PARAMS.h, bad_challenge, s)
            )

    def test_partial_match_is_failure(self) -> None:
        secret, blinding, challenge = 1111, 2222, 3333
        y1, y2, r1, r2, s = _honest_transcript(secret, blinding, challenge)
        # y2 for a different secret keeps the first equation true but breaks the second.
        _, other_y2 = derive_commitments(secret + 1)
        self.assertFalse(verify_proof(PARAMS.p, y1, other_y2, r1, r2, PARAMS.g, PARAMS.h, challenge, s))

    def test_wrong_secret_rejected(self) -> None:
        y1, y2 = derive_commitments(123456789)
        prover = ChaumPedersenProver(123456788)
        commitment = prover.begin_challenge()
        challenge = random_scalar(PARAMS.q - 1) + 1
        s = prover.respond(commitment.blinding, challenge)
        self.assertFalse(
            verify_proof(PARAMS.p, y1, y2, commitment.r1, commitment.r2, PARAMS.g, PARAMS.h, challenge, s)
        )


class TestProver(unittest.TestCase):
    def test_register_matches_commitments(self) -> None:
        prover = ChaumPedersenProver(123456789)
        self.assertEqual(
            prover.register(),
            (pow(PARAMS.g, 123456789, PARAMS.p), pow(PARAMS.h, 123456789, PARAMS.p)),
        )

    def test_fresh_blinding_per_attempt(self) -> None:
        prover = ChaumPedersenProver(123456789)
        first = prover.begin_challenge()
        second = prover.begin_challenge()
        self.assertNotEqual(first.blinding, second.blinding)
        self.assertEqual(first.r1, pow(PARAMS.g, first.blinding, PARAMS.p))
        self.assertEqual(first.r2, pow(PARAMS.h, first.blinding, PARAMS.p))

    def test_honest_round_verifies(self) -> None:
        prover = ChaumPedersenProver(123456789)
        y1, y2 = prover.register()
        commitment = prover.begin_challenge()
        challenge = random_scalar(PARAMS.q)
        s = prover.respond(commitment.blinding, challenge)
        self.assertTrue(
            verify_proof(PARAMS.p, y1, y2, commitment.r1, commitment.r2, PARAMS.g, PARAMS.h, challenge, s)
        )

    def test_negative_secret_rejected(self) -> None:
        with self.assertRaises(ValueError):
            ChaumPedersenProver(-1)


if __name__ == "__main__":
    unittest.main()
