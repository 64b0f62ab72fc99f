#!/usr/bin/python3


"Rings, Euclidean domains and the ring of integers."


from itertools import product

from algebra import AlgebraicStructure, RingAdditiveGroup, RingMultiplicativeMonoid
from utils import cached


__all__ = 'Ring', 'EuclideanDomain', 'IntegerRing'


class Ring(AlgebraicStructure):
	"Base class of rings. Subclasses provide `zero`, `one`, `add`, `negate` and `multiply`."

	def zero(self):
		raise NotImplementedError

	def one(self):
		raise NotImplementedError

	def add(self, a, b):
		raise NotImplementedError

	def negate(self, a):
		raise NotImplementedError

	def multiply(self, a, b):
		raise NotImplementedError

	def equals(self, a, b):
		return a == b

	def subtract(self, a, b):
		return self.add(a, self.negate(b))

	def is_zero(self, a):
		return self.equals(a, self.zero())

	def is_one(self, a):
		return self.equals(a, self.one())

	@property
	@cached
	def additive_group(self):
		return RingAdditiveGroup(self)

	@property
	@cached
	def multiplicative_monoid(self):
		return RingMultiplicativeMonoid(self)

	def from_int(self, n):
		"The image of `n` under the unique ring homomorphism from the integers."
		return self.additive_group.pow(self.one(), n)

	def non_zero_pow(self, a, n):
		return self.multiplicative_monoid.pow(a, n)

	def pow(self, a, n):
		if self.is_zero(a):
			if n == 0:
				raise ArithmeticError("Zero to zero power.")
			elif n < 0:
				raise ZeroDivisionError("Zero to negative power.")
			return a
		return self.non_zero_pow(a, n)

	def dot(self, a, b, c, d):
		"Returns `a * c + b * d`."
		return self.add(self.multiply(a, c), self.multiply(b, d))

	def sum(self, addends):
		result = self.zero()
		for addend in addends:
			result = self.add(result, addend)
		return result

	def product(self, factors):
		result = self.one()
		for factor in factors:
			result = self.multiply(result, factor)
		return result

	def to_string(self, a=None):
		if a is None:
			return super().to_string()
		return str(a)

	def to_latex(self, a):
		return self.to_string(a)


class EuclideanDomain(Ring):
	"Ring with division with remainder. Subclasses provide `ed_norm` and `divmod`, where the remainder is smaller than the divisor in `ed_norm`."

	def ed_norm(self, a):
		raise NotImplementedError

	def divmod(self, a, b):
		raise NotImplementedError

	def div(self, a, b):
		return self.divmod(a, b)[0]

	def mod(self, a, b):
		return self.divmod(a, b)[1]

	def is_unit(self, a):
		raise NotImplementedError

	def unit_inverse(self, a):
		raise NotImplementedError

	def gcd(self, a, b):
		while not self.is_zero(b):
			a, b = b, self.mod(a, b)
		return a

	def extended_gcd(self, a, b):
		"""
		Returns `(g, x, y, s, t)` where `g` is a greatest common divisor of `a` and `b`, `g = a * x + b * y` and `a * s + b * t = 0`.
		The cofactors `s` and `t` are coprime, so `-t / s` is the reduced form of the fraction `a / b`.
		"""

		x0, x1 = self.one(), self.zero()
		y0, y1 = self.zero(), self.one()
		while not self.is_zero(b):
			q, r = self.divmod(a, b)
			a, b = b, r
			x0, x1 = x1, self.subtract(x0, self.multiply(q, x1))
			y0, y1 = y1, self.subtract(y0, self.multiply(q, y1))
		return a, x0, y0, x1, y1

	def inverse_mod(self, a, b):
		"Inverse of `a` modulo `b`. Raises `ArithmeticError` when `a` and `b` are not coprime."

		g, x, _, _, _ = self.extended_gcd(a, b)
		if self.is_zero(g) or not self.is_unit(g):
			raise ArithmeticError(f"{self.to_string(a)} is not invertible modulo {self.to_string(b)}.")
		return self.mod(self.multiply(x, self.unit_inverse(g)), b)


class IntegerRing(EuclideanDomain):
	"The integers, represented by Python ints. Division rounds so that the remainder is never negative."

	def zero(self):
		return 0

	def one(self):
		return 1

	def from_int(self, n):
		return n

	def add(self, a, b):
		return a + b

	def subtract(self, a, b):
		return a - b

	def negate(self, a):
		return -a

	def multiply(self, a, b):
		return a * b

	def is_zero(self, a):
		return a == 0

	def is_one(self, a):
		return a == 1

	def non_zero_pow(self, a, n):
		if n < 0:
			raise ValueError(f"Negative exponent {n} in the integers.")
		return a ** n

	def ed_norm(self, a):
		return abs(a)

	def divmod(self, a, b):
		if b == 0:
			raise ZeroDivisionError("Integer division by zero.")
		q, r = divmod(a, b)
		if r < 0:
			q += 1
			r -= b
		return q, r

	def is_unit(self, a):
		return a == 1 or a == -1

	def unit_inverse(self, a):
		if not self.is_unit(a):
			raise ArithmeticError(f"{a} is not a unit.")
		return a

	def to_string(self, a=None):
		if a is None:
			return 'Z'
		return str(a)


if __debug__:
	__all__ = __all__ + ('ring_axioms', 'euclidean_axioms')

	def ring_axioms(R, x, y, z):
		zero = R.zero()
		one = R.one()

		assert R.is_zero(zero)
		assert R.is_one(one)
		assert not R.equals(zero, one)

		assert R.equals(R.add(x, zero), x)
		assert R.equals(R.multiply(x, one), x)
		assert R.equals(R.multiply(x, zero), zero)
		assert R.is_zero(R.subtract(x, x))
		assert R.is_zero(R.add(x, R.negate(x)))

		assert R.equals(R.add(x, y), R.add(y, x))
		assert R.equals(R.multiply(x, y), R.multiply(y, x))
		assert R.equals(R.subtract(x, y), R.add(x, R.negate(y)))

		assert R.equals(R.add(R.add(x, y), z), R.add(x, R.add(y, z)))
		assert R.equals(R.multiply(R.multiply(x, y), z), R.multiply(x, R.multiply(y, z)))
		assert R.equals(R.multiply(x, R.add(y, z)), R.add(R.multiply(x, y), R.multiply(x, z)))

		assert R.equals(R.dot(x, y, z, one), R.add(R.multiply(x, z), y))
		if not R.is_zero(x):
			assert R.equals(R.pow(x, 2), R.multiply(x, x))
			assert R.equals(R.pow(x, 3), R.multiply(x, R.multiply(x, x)))

	def euclidean_axioms(R, x, y):
		if R.is_zero(y):
			try:
				R.divmod(x, y)
			except ZeroDivisionError:
				pass
			else:
				assert False, "Division by zero should raise ZeroDivisionError."
			return

		q, r = R.divmod(x, y)
		assert R.equals(R.add(R.multiply(q, y), r), x)
		assert R.is_zero(r) or R.ed_norm(r) < R.ed_norm(y)

		g, s0, t0, s, t = R.extended_gcd(x, y)
		assert R.equals(R.add(R.multiply(x, s0), R.multiply(y, t0)), g)
		assert R.is_zero(R.add(R.multiply(x, s), R.multiply(y, t)))
		assert R.is_zero(R.mod(x, g))
		assert R.is_zero(R.mod(y, g))
		assert R.is_unit(R.gcd(s, t))

	def test_integer_ring():
		Z = IntegerRing()
		assert Z.to_string() == 'Z'
		assert str(Z) == 'Z'
		assert Z == IntegerRing()

		assert Z.divmod(7, 3) == (2, 1)
		assert Z.divmod(-7, 3) == (-3, 2)
		assert Z.divmod(7, -3) == (-2, 1)
		assert Z.divmod(-7, -3) == (3, 2)
		assert Z.mod(-1, 5) == 4
		assert Z.div(10, 5) == 2

		assert Z.from_int(-4) == -4
		assert Ring.from_int(Z, -4) == -4
		assert Ring.from_int(Z, 9) == 9
		assert Z.pow(3, 4) == 81
		assert Z.pow(0, 3) == 0
		try:
			Z.pow(0, 0)
		except ArithmeticError:
			pass
		else:
			assert False, "Zero to zero power should raise ArithmeticError."

		assert Z.gcd(12, 18) == 6
		assert Z.inverse_mod(3, 7) == 5
		assert Z.inverse_mod(-3, 7) == 2
		for a, b in [(2, 4), (0, 5)]:
			try:
				Z.inverse_mod(a, b)
			except ArithmeticError:
				pass
			else:
				assert False, f"{a} should not be invertible modulo {b}."

		assert Z.sum([1, 2, 3]) == 6
		assert Z.product([2, 3, 4]) == 24
		assert Z.dot(1, 2, 3, 4) == 11
		assert Z.additive_group is Z.additive_group
		assert Z.additive_group.pow(5, -3) == -15
		assert Z.multiplicative_monoid.pow(2, 10) == 1024

		for x, y, z in product(range(-4, 5), repeat=3):
			ring_axioms(Z, x, y, z)
		for x, y in product(range(-12, 13), repeat=2):
			euclidean_axioms(Z, x, y)

	def rings_test_suite(verbose=False):
		if verbose: print("running test suite")
		if verbose: print("test IntegerRing()")
		test_integer_ring()


if __debug__ and __name__ == '__main__':
	rings_test_suite(verbose=True)
