import hashlib
import random
import unittest

from srp6.core.bigint import (from_hex, hash_padded_pair, pad_to_length, random_in_range,
                              salt_to_bytes, to_hex, to_unsigned_bytes)
from srp6.core.constants import RANDOM_RANGE_MAX_ATTEMPTS
from srp6.core.routines import DigestHashRoutine


class AlwaysTooLarge:
    """Random source whose full-width draws always exceed the range."""

    def __init__(self):
        self.calls = 0

    def getrandbits(self, bits):
        self.calls += 1
        return (1 << bits) - 1


class TestHex(unittest.TestCase):

    def test_to_hex(self):
        self.assertEqual(to_hex(255), 'ff')
        self.assertEqual(to_hex(0), '0')
        self.assertIsNone(to_hex(None))

    def test_from_hex(self):
        self.assertEqual(from_hex('ff'), 255)
        self.assertEqual(from_hex('1E97DA52'), 0x1e97da52)
        self.assertIsNone(from_hex('not hex'))
        self.assertIsNone(from_hex(''))
        self.assertIsNone(from_hex(None))


class TestUnsignedBytes(unittest.TestCase):

    def test_no_sign_byte(self):
        """Values with the top bit set must not gain a leading zero byte."""
        self.assertEqual(to_unsigned_bytes(0xff), b'\xff')
        self.assertEqual(to_unsigned_bytes(0x80ff), b'\x80\xff')
        self.assertEqual(to_unsigned_bytes(256), b'\x01\x00')
        self.assertEqual(to_unsigned_bytes(0), b'')

    def test_negative_rejected(self):
        with self.assertRaises(ValueError):
            to_unsigned_bytes(-1)

    def test_pad_to_length(self):
        self.assertEqual(pad_to_length(1, 4), b'\x00\x00\x00\x01')
        self.assertEqual(pad_to_length(0xff, 1), b'\xff')
        self.assertEqual(pad_to_length(0, 2), b'\x00\x00')

    def test_pad_overflow(self):
        with self.assertRaises(ValueError):
            pad_to_length(0x1234, 1)

    def test_salt_to_bytes(self):
        self.assertEqual(salt_to_bytes(b'\x00\x01'), b'\x00\x01')
        self.assertEqual(salt_to_bytes(bytearray(b'\x02')), b'\x02')
        self.assertEqual(salt_to_bytes(0x1e97), b'\x1e\x97')
        with self.assertRaises(TypeError):
            salt_to_bytes('1e97')


class TestHashPaddedPair(unittest.TestCase):

    def test_pads_to_modulus_length(self):
        N = 0xffff
        expected = hashlib.sha1(b'\x00\x01\x00\x02').digest()
        result = hash_padded_pair(DigestHashRoutine('SHA-1'), N, 1, 2)
        self.assertEqual(result, int.from_bytes(expected, 'big'))

    def test_order_matters(self):
        routine = DigestHashRoutine('SHA-1')
        self.assertNotEqual(hash_padded_pair(routine, 0xffff, 1, 2),
                            hash_padded_pair(routine, 0xffff, 2, 1))


class TestRandomInRange(unittest.TestCase):

    def test_single_value_range(self):
        self.assertEqual(random_in_range(7, 7), 7)

    def test_inverted_range(self):
        with self.assertRaises(ValueError):
            random_in_range(8, 7)

    def test_values_within_range(self):
        rng = random.Random(1234)
        for _ in range(200):
            value = random_in_range(10, 20, rng)
            self.assertTrue(10 <= value <= 20)

    def test_large_minimum(self):
        rng = random.Random(99)
        low, high = 1 << 100, (1 << 101) - 1
        for _ in range(50):
            self.assertTrue(low <= random_in_range(low, high, rng) <= high)

    def test_fallback_terminates(self):
        """After the rejection budget is spent a restricted draw is returned."""
        rng = AlwaysTooLarge()
        value = random_in_range(1, 8, rng)
        self.assertEqual(rng.calls, RANDOM_RANGE_MAX_ATTEMPTS + 1)
        self.assertTrue(1 <= value <= 8)


if __name__ == '__main__':
    unittest.main()
