#!/usr/bin/python3


__all__ = 'Field', 'FiniteField'


from itertools import product
from fractions import Fraction

from algebra import FieldMultiplicativeGroup
from rings import Ring, IntegerRing
from utils import *


class Field(Ring):
	"Base class of fields. Subclasses provide `unsafe_invert`, which may assume a nonzero argument."

	def unsafe_invert(self, a):
		raise NotImplementedError

	def unsafe_divide(self, a, b):
		return self.multiply(a, self.unsafe_invert(b))

	def invert(self, a):
		if self.is_zero(a):
			raise ZeroDivisionError(f"Inverse of zero in {self.to_string()}.")
		return self.unsafe_invert(a)

	def divide(self, a, b):
		if self.is_zero(b):
			raise ZeroDivisionError(f"Division by zero in {self.to_string()}.")
		return self.unsafe_divide(a, b)

	@property
	@cached
	def multiplicative_group(self):
		return FieldMultiplicativeGroup(self)

	def non_zero_pow(self, a, n):
		return self.multiplicative_group.pow(a, n)

	def from_rational(self, r):
		"Image of a rational number (an int or a `Fraction`) in this field."
		r = Fraction(r)
		return self.divide(self.from_int(r.numerator), self.from_int(r.denominator))


class FiniteField(Field):
	"Prime field of integers modulo `p`. Elements are ints in `range(p)`."

	algebra_params_names = ('p',)

	def __init__(self, p):
		if not isinstance(p, int) or isinstance(p, bool):
			raise TypeError(f"Field characteristic must be an integer, got {p!r}.")
		if not is_prime(p):
			raise ValueError(f"Provided number {p} is not a prime.")
		self.p = p

	@property
	@cached
	def integers(self):
		return IntegerRing()

	@property
	def size(self):
		return self.p

	def domain(self):
		"Yield all elements of this field."
		yield from range(self.p)

	def zero(self):
		return 0

	def one(self):
		return 1

	def from_int(self, n):
		if not isinstance(n, int):
			raise TypeError(f"Element of {self.to_string()} must come from an integer, got {n!r}.")
		return n % self.p

	def add(self, a, b):
		return (a + b) % self.p

	def subtract(self, a, b):
		return (a - b) % self.p

	def negate(self, a):
		return (-a) % self.p

	def multiply(self, a, b):
		return (a * b) % self.p

	def is_zero(self, a):
		return a % self.p == 0

	def is_one(self, a):
		return a % self.p == 1

	def unsafe_invert(self, a):
		return self.integers.inverse_mod(a, self.p)

	def to_string(self, a=None):
		if a is None:
			return 'F' + subscript(self.p)
		return str(a)


if __debug__:
	from rings import ring_axioms

	__all__ = __all__ + ('field_axioms',)

	def field_axioms(F, x, y, z):
		zero = F.zero()
		one = F.one()

		ring_axioms(F, x, y, z)

		try:
			F.divide(x, zero)
		except ZeroDivisionError:
			pass
		else:
			assert False, "Division by zero should raise exception."

		try:
			F.invert(zero)
		except ZeroDivisionError:
			pass
		else:
			assert False, "Inverse of zero should raise exception."

		assert F.equals(F.divide(one, one), one)
		if not F.is_zero(x) and not F.is_one(x): assert not F.is_one(F.invert(x))
		if not F.is_zero(y): assert F.equals(F.divide(x, y), F.multiply(x, F.invert(y)))
		if not F.is_zero(y): assert F.is_one(F.multiply(y, F.invert(y)))
		if not F.is_zero(z): assert F.equals(F.divide(F.add(x, y), z), F.add(F.divide(x, z), F.divide(y, z)))
		if not F.is_zero(x): assert F.equals(F.pow(x, -2), F.invert(F.multiply(x, x)))

	def test_finite_field_construction():
		for p in [2, 3, 5, 7, 11, 13]:
			assert FiniteField(p).p == p

		for p in [-3, 0, 1, 4, 9, 91]:
			try:
				FiniteField(p)
			except ValueError:
				pass
			else:
				assert False, f"FiniteField({p}) should raise ValueError."

		for p in [2.0, "3", None]:
			try:
				FiniteField(p)
			except TypeError:
				pass
			else:
				assert False, f"FiniteField({p!r}) should raise TypeError."

		assert FiniteField(5) == FiniteField(5)
		assert FiniteField(5) != FiniteField(7)
		assert FiniteField(5).to_string() == 'F₅'

	def test_finite_field_arithmetic():
		F = FiniteField(5)
		assert F.from_int(7) == 2
		assert F.from_int(-1) == 4
		assert Ring.from_int(F, 7) == 2
		assert Ring.from_int(F, -1) == 4
		assert F.invert(2) == 3
		assert F.divide(1, 3) == 2
		assert F.pow(2, 4) == 1
		assert F.pow(2, -1) == 3
		assert F.from_rational(Fraction(1, 2)) == 3
		assert F.from_rational(-3) == 2
		assert F.to_string(3) == '3'
		assert list(F.domain()) == [0, 1, 2, 3, 4]

		try:
			F.from_rational(Fraction(1, 5))
		except ZeroDivisionError:
			pass
		else:
			assert False, "1/5 has no image in F₅."

		for n in [2.5, "1", None, Fraction(1, 2)]:
			try:
				F.from_int(n)
			except TypeError:
				pass
			else:
				assert False, f"F.from_int({n!r}) should raise TypeError."

	def test_field_axioms():
		for p in [2, 3, 5, 7]:
			F = FiniteField(p)
			for x, y, z in product(F.domain(), F.domain(), F.domain()):
				field_axioms(F, x, y, z)

	def fields_test_suite(verbose=False):
		if verbose: print("running test suite")
		if verbose: print(" construction")
		test_finite_field_construction()
		if verbose: print(" arithmetic")
		test_finite_field_arithmetic()
		if verbose: print(" field axioms")
		test_field_axioms()


if __debug__ and __name__ == '__main__':
	fields_test_suite(verbose=True)
