import unittest

from salevault.nanocontracts.exception import ArithmeticFault, NCFail
from salevault.utils.safe_math import (
    ERR_DIV0,
    ERR_OVER,
    ERR_UNDER,
    MAX_AMOUNT,
    require_uint,
    u256_add,
    u256_div,
    u256_mul,
    u256_sub,
)


class SafeMathTestCase(unittest.TestCase):
    def test_bounds(self):
        self.assertEqual(MAX_AMOUNT, 2**256 - 1)
        require_uint(0, 1, MAX_AMOUNT)
        for value in (-1, MAX_AMOUNT + 1, True, 1.5, "1"):
            with self.subTest(value=value):
                with self.assertRaises(ArithmeticFault):
                    require_uint(value)

    def test_add(self):
        self.assertEqual(u256_add(2, 3), 5)
        self.assertEqual(u256_add(MAX_AMOUNT - 1, 1), MAX_AMOUNT)
        with self.assertRaises(ArithmeticFault) as cm:
            u256_add(MAX_AMOUNT, 1)
        self.assertEqual(str(cm.exception), ERR_OVER)

    def test_sub(self):
        self.assertEqual(u256_sub(5, 5), 0)
        with self.assertRaises(ArithmeticFault) as cm:
            u256_sub(4, 5)
        self.assertEqual(str(cm.exception), ERR_UNDER)

    def test_mul(self):
        self.assertEqual(u256_mul(0, MAX_AMOUNT), 0)
        self.assertEqual(u256_mul(2**128, 2**127), 2**255)
        with self.assertRaises(ArithmeticFault):
            u256_mul(2**128, 2**128)

    def test_div(self):
        self.assertEqual(u256_div(7, 2), 3)
        with self.assertRaises(ArithmeticFault) as cm:
            u256_div(1, 0)
        self.assertEqual(str(cm.exception), ERR_DIV0)

    def test_fault_is_ncfail(self):
        self.assertTrue(issubclass(ArithmeticFault, NCFail))
