import hashlib
import unittest

from srp6.core.alternates import (HexHashedClientEvidenceRoutine, HexHashedServerEvidenceRoutine,
                                  IdentityBoundPasswordKeyRoutine, PBKDF2PasswordKeyRoutine,
                                  hash_hex_values)
from srp6.core.bigint import from_hex, hash_padded_pair, to_unsigned_bytes
from srp6.core.exceptions import SRP6ConfigError
from srp6.core.params import CryptoParameters
from srp6.core.routines import (DefaultClientEvidenceRoutine, DefaultPasswordKeyRoutine,
                                DefaultServerEvidenceRoutine, DefaultURoutine, DigestHashRoutine,
                                canonical_hash_name, to_bytes)
from srp6.core.verifier import SRP6VerifierGenerator

VECTOR_N = from_hex("115b8b692e0e045692cf280b436735c77a5a9e8a9e7ed56c965f87db5b2a2ece3")
VECTOR_SALT = bytes.fromhex("1e97da52cbdcd653f85b")
VECTOR_V = from_hex("100e0c40a5c281dbfb046911634f8e69d3469964863c01eb4683d8d182926da72")


def sha1_int(data):
    return int.from_bytes(hashlib.sha1(data).digest(), 'big')


class TestHashRoutine(unittest.TestCase):

    def test_digest_matches_hashlib(self):
        self.assertEqual(DigestHashRoutine('SHA-256').hash(b'abc'), hashlib.sha256(b'abc').digest())
        self.assertEqual(DigestHashRoutine('SHA-1').hash(b''), hashlib.sha1(b'').digest())

    def test_digest_size(self):
        self.assertEqual(DigestHashRoutine('SHA-1').digest_size, 20)
        self.assertEqual(DigestHashRoutine('SHA-512').digest_size, 64)

    def test_canonical_names(self):
        self.assertEqual(canonical_hash_name('sha1'), 'SHA-1')
        self.assertEqual(canonical_hash_name('SHA_384'), 'SHA-384')
        with self.assertRaises(SRP6ConfigError):
            canonical_hash_name('whirlpool')

    def test_to_bytes(self):
        self.assertEqual(to_bytes('alice'), b'alice')
        self.assertEqual(to_bytes(b'alice'), b'alice')
        self.assertIsNone(to_bytes(None))
        with self.assertRaises(TypeError):
            to_bytes(42)


class TestPasswordKeyRoutines(unittest.TestCase):

    def test_default_ignores_identity(self):
        routine = DefaultPasswordKeyRoutine()
        salt = b'\x01\x02\x03'
        expected = sha1_int(salt + hashlib.sha1(b'secret').digest())
        self.assertEqual(routine.compute_x(salt, b'alice', b'secret'), expected)
        self.assertEqual(routine.compute_x(salt, None, b'secret'), expected)

    def test_identity_bound(self):
        routine = IdentityBoundPasswordKeyRoutine()
        salt = b'\x01\x02\x03'
        expected = sha1_int(salt + hashlib.sha1(b'alice:secret').digest())
        self.assertEqual(routine.compute_x(salt, b'alice', b'secret'), expected)
        self.assertNotEqual(routine.compute_x(salt, b'bob', b'secret'), expected)

    def test_identity_bound_requires_identity(self):
        with self.assertRaises(ValueError):
            IdentityBoundPasswordKeyRoutine().compute_x(b'\x01', None, b'secret')

    def test_identity_bound_vector(self):
        """Known verifier for alice/secret over a 257-bit prime."""
        params = CryptoParameters(VECTOR_N, 2)
        generator = SRP6VerifierGenerator(params, IdentityBoundPasswordKeyRoutine())
        self.assertEqual(generator.generate_verifier(VECTOR_SALT, 'alice', 'secret'), VECTOR_V)
        # the same salt given as an integer
        self.assertEqual(generator.generate_verifier(from_hex("1e97da52cbdcd653f85b"), 'alice', 'secret'),
                         VECTOR_V)

    def test_pbkdf2(self):
        routine = PBKDF2PasswordKeyRoutine(1000)
        expected = hashlib.pbkdf2_hmac('sha1', b'secret', b'salty', 1000, 20)
        self.assertEqual(routine.compute_x(b'salty', b'alice', b'secret'), int.from_bytes(expected, 'big'))

    def test_pbkdf2_sha256(self):
        routine = PBKDF2PasswordKeyRoutine(1000, 'SHA-256')
        expected = hashlib.pbkdf2_hmac('sha256', b'secret', b'salty', 1000, 32)
        self.assertEqual(routine.compute_x(b'salty', None, b'secret'), int.from_bytes(expected, 'big'))

    def test_pbkdf2_minimum_iterations(self):
        with self.assertRaises(SRP6ConfigError):
            PBKDF2PasswordKeyRoutine(999)

    def test_routine_equality(self):
        self.assertEqual(DefaultPasswordKeyRoutine('sha1'), DefaultPasswordKeyRoutine('SHA-1'))
        self.assertNotEqual(DefaultPasswordKeyRoutine(), IdentityBoundPasswordKeyRoutine())
        self.assertNotEqual(PBKDF2PasswordKeyRoutine(1000), PBKDF2PasswordKeyRoutine(2000))


class TestEvidenceRoutines(unittest.TestCase):

    def setUp(self):
        self.params = CryptoParameters.get_instance(256)

    def test_default_u(self):
        u = DefaultURoutine().compute_u(self.params, 5, 7)
        self.assertEqual(u, hash_padded_pair(self.params.hash_routine(), self.params.N, 5, 7))

    def test_default_client_evidence(self):
        A, B, S = 0x80ff, 0x01, 0x1234
        expected = sha1_int(to_unsigned_bytes(A) + to_unsigned_bytes(B) + to_unsigned_bytes(S))
        self.assertEqual(DefaultClientEvidenceRoutine().compute_client_evidence(self.params, A, B, S),
                         expected)

    def test_default_server_evidence(self):
        A, M1, S = 0xabc, 0xdef, 0x1234
        expected = sha1_int(b'\x0a\xbc\x0d\xef\x12\x34')
        self.assertEqual(DefaultServerEvidenceRoutine().compute_server_evidence(self.params, A, M1, S),
                         expected)

    def test_hex_evidence(self):
        self.assertEqual(HexHashedClientEvidenceRoutine().compute_client_evidence(self.params, 0xab, 1, 0xff),
                         sha1_int(b'ab1ff'))
        self.assertEqual(HexHashedServerEvidenceRoutine().compute_server_evidence(self.params, 0xab, 1, 0xff),
                         sha1_int(b'ab1ff'))
        self.assertEqual(hash_hex_values(DigestHashRoutine('SHA-1'), 0x0a), sha1_int(b'a'))

    def test_default_evidence_has_no_sign_byte(self):
        """High-bit values hash without the leading 0x00 of a signed encoding."""
        A, B, S = 0x80, 0x81, 0xff
        unsigned = sha1_int(b'\x80\x81\xff')
        signed = sha1_int(b'\x00\x80\x00\x81\x00\xff')
        result = DefaultClientEvidenceRoutine().compute_client_evidence(self.params, A, B, S)
        self.assertEqual(result, unsigned)
        self.assertNotEqual(result, signed)

    def test_hex_and_default_differ(self):
        default = DefaultClientEvidenceRoutine().compute_client_evidence(self.params, 0xab, 1, 0xff)
        hexed = HexHashedClientEvidenceRoutine().compute_client_evidence(self.params, 0xab, 1, 0xff)
        self.assertNotEqual(default, hexed)


if __name__ == '__main__':
    unittest.main()
