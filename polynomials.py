#!/usr/bin/python3


"Univariate polynomials over a prime field, coefficients stored lowest degree first."


__all__ = 'Polynomial', 'PolynomialRing'


from itertools import zip_longest, product
from math import inf

from algebra import Element
from order import Infinite
from rings import EuclideanDomain
from fields import FiniteField


class Polynomial(Element):
	"Polynomial as an immutable tuple of coefficients without trailing zeros. The zero polynomial has no coefficients."

	__slots__ = ('algebra', 'coefficients')

	def __init__(self, algebra, coefficients):
		self.algebra = algebra
		self.coefficients = tuple(coefficients)

	def __repr__(self):
		return f'{self.__class__.__name__}({list(self.coefficients)!r})'

	def __len__(self):
		return len(self.coefficients)

	def __iter__(self):
		return iter(self.coefficients)

	def __getitem__(self, n):
		try:
			return self.coefficients[n]
		except IndexError:
			return 0

	def __eq__(self, other):
		if self is other:
			return True
		if not isinstance(other, Polynomial):
			return NotImplemented
		return self.coefficients == other.coefficients and self.algebra == other.algebra

	def __hash__(self):
		return hash((self.__class__.__name__, self.coefficients))

	def __call__(self, x):
		"Evaluate at an element of the coefficient field."
		field = self.algebra.field
		result = field.zero()
		for c in reversed(self.coefficients):
			result = field.add(field.multiply(result, x), c)
		return result

	@property
	def degree(self):
		return self.algebra.degree(self)

	@property
	def valuation(self):
		return self.algebra.valuation(self)

	def __divmod__(self, other):
		other = self.coerce(other)
		if other is NotImplemented:
			return NotImplemented
		return self.algebra.divmod(self, other)

	def __floordiv__(self, other):
		other = self.coerce(other)
		if other is NotImplemented:
			return NotImplemented
		return self.algebra.div(self, other)

	def __mod__(self, other):
		other = self.coerce(other)
		if other is NotImplemented:
			return NotImplemented
		return self.algebra.mod(self, other)

	def __lshift__(self, n):
		return self.algebra.shift(self, n)

	def __rshift__(self, n):
		return self.algebra.shift(self, -n)


class PolynomialRing(EuclideanDomain):
	"Ring of polynomials in `x` over a prime field. Division is by leading terms and the Euclidean norm is the degree."

	algebra_params_names = ('field',)

	def __init__(self, field):
		if not isinstance(field, FiniteField):
			raise TypeError(f"Polynomial coefficients must come from a FiniteField, got {field!r}.")
		self.field = field
		self.p = field.p

	def __call__(self, coefficients):
		return self.from_ints(coefficients)

	@staticmethod
	def truncate_zeros(coefficients):
		coefficients = list(coefficients)
		while coefficients and coefficients[-1] == 0:
			coefficients.pop()
		return tuple(coefficients)

	def make(self, coefficients):
		"Polynomial from coefficients that are already field elements."
		return Polynomial(self, self.truncate_zeros(coefficients))

	def from_ints(self, coefficients):
		if isinstance(coefficients, Polynomial):
			if coefficients.algebra != self:
				raise TypeError(f"Polynomial over {coefficients.algebra.field} used in {self.to_string()}.")
			return coefficients
		return self.make(self.field.from_int(_c) for _c in coefficients)

	def from_int(self, n):
		return self.make([self.field.from_int(n)])

	def domain(self, size):
		"Yield all polynomials with fewer than `size` coefficients."
		for coefficients in product(self.field.domain(), repeat=size):
			yield self.make(coefficients)

	def zero(self):
		return Polynomial(self, ())

	def one(self):
		return Polynomial(self, (1,))

	def is_zero(self, a):
		return not a.coefficients

	def is_one(self, a):
		return a.coefficients == (1,)

	def add(self, a, b):
		F = self.field
		return self.make(F.add(_x, _y) for (_x, _y) in zip_longest(a.coefficients, b.coefficients, fillvalue=0))

	def subtract(self, a, b):
		F = self.field
		return self.make(F.subtract(_x, _y) for (_x, _y) in zip_longest(a.coefficients, b.coefficients, fillvalue=0))

	def negate(self, a):
		F = self.field
		return Polynomial(self, (F.negate(_c) for _c in a.coefficients))

	def multiply(self, a, b):
		if self.is_zero(a) or self.is_zero(b):
			return self.zero()

		F = self.field
		result = [0] * (len(a) + len(b) - 1)
		for i, x in enumerate(a.coefficients):
			if x == 0:
				continue
			for j, y in enumerate(b.coefficients):
				result[i + j] = F.add(result[i + j], F.multiply(x, y))
		return self.make(result)

	def multiply_by_scalar(self, a, c):
		F = self.field
		return self.make(F.multiply(_x, c) for _x in a.coefficients)

	def divide_by_scalar(self, a, c):
		F = self.field
		c = F.invert(c)
		return Polynomial(self, (F.multiply(_x, c) for _x in a.coefficients))

	def degree(self, a):
		"Index of the highest nonzero coefficient, `-inf` for the zero polynomial."
		return len(a) - 1 if a.coefficients else -inf

	def valuation(self, a):
		"Index of the lowest nonzero coefficient, `Infinite` for the zero polynomial."
		for n, c in enumerate(a.coefficients):
			if c != 0:
				return n
		return Infinite

	def leading_coefficient(self, a):
		if not a.coefficients:
			raise ValueError("Zero polynomial has no leading coefficient.")
		return a.coefficients[-1]

	def shift(self, a, n):
		"Multiply by `x ** n`. Negative `n` drops the lowest coefficients."
		if n >= 0:
			if not a.coefficients:
				return a
			return Polynomial(self, (0,) * n + a.coefficients)
		else:
			return Polynomial(self, a.coefficients[-n:])

	def from_valuation(self, n):
		"Returns `x ** n`, the zero polynomial for `Infinite`."
		if n is Infinite:
			return self.zero()
		if n < 0:
			raise ValueError(f"Negative power {n} of x is not a polynomial.")
		return Polynomial(self, (0,) * n + (1,))

	def residue(self, a):
		"Value at zero."
		return a[0]

	def ed_norm(self, a):
		return max(self.degree(a), 0)

	def divmod(self, a, b):
		if self.is_zero(b):
			raise ZeroDivisionError("Polynomial division by zero.")

		F = self.field
		db = self.degree(b)
		lc = F.invert(self.leading_coefficient(b))
		quotient = [0] * max(len(a) - db, 0)
		remainder = list(a.coefficients)

		for k in range(len(remainder) - 1, db - 1, -1):
			c = remainder[k]
			if c == 0:
				continue
			q = F.multiply(c, lc)
			quotient[k - db] = q
			for i, y in enumerate(b.coefficients):
				remainder[k - db + i] = F.subtract(remainder[k - db + i], F.multiply(q, y))

		return self.make(quotient), self.make(remainder)

	def is_unit(self, a):
		return len(a) == 1

	def unit_inverse(self, a):
		if not self.is_unit(a):
			raise ArithmeticError(f"{self.to_string(a)} is not a unit.")
		return Polynomial(self, (self.field.invert(a[0]),))

	def monomials(self, a, power):
		for n, c in enumerate(a.coefficients):
			if c == 0:
				continue
			if n == 0:
				yield str(c)
			elif c == 1:
				yield 'x' + power(n)
			else:
				yield str(c) + 'x' + power(n)

	def to_string(self, a=None):
		if a is None:
			return self.field.to_string() + '[x]'
		if not a.coefficients:
			return '0'
		return ' + '.join(self.monomials(a, lambda n: '' if n == 1 else f'^{n}'))

	def to_latex(self, a):
		if not a.coefficients:
			return '0'
		return ' + '.join(self.monomials(a, lambda n: '' if n == 1 else f'^{{{n}}}'))


if __debug__:
	from rings import ring_axioms, euclidean_axioms

	def test_polynomial_arithmetic():
		R = PolynomialRing(FiniteField(5))

		assert R([1, 2, 0, 0]) == R([1, 2])
		assert R([0, 0]) == R.zero()
		assert R([5, 10]) == R.zero()
		assert R.from_int(7) == R([2])
		assert R([3, 4]).coefficients == (3, 4)

		assert R.add(R([1, 2]), R([3, 4])) == R([4, 1])
		assert R.add(R([1, 2]), R([4, 3])) == R.zero()
		assert R.subtract(R([1, 2, 3]), R([1, 2])) == R([0, 0, 3])
		assert R.negate(R([1, 2])) == R([4, 3])
		assert R.multiply(R([1, 2]), R([3, 4])) == R([3, 0, 3])
		assert R.multiply_by_scalar(R([1, 2]), 3) == R([3, 1])
		assert R.divide_by_scalar(R([3, 1]), 3) == R([1, 2])

		x = R([0, 1])
		assert x * x == R([0, 0, 1])
		assert (x + 1) ** 2 == R([1, 2, 1])
		assert 2 * x - 1 == R([4, 2])
		assert x(3) == 3
		assert R([1, 2, 1])(4) == 0

	def test_polynomial_measures():
		R = PolynomialRing(FiniteField(5))

		assert R.degree(R([1, 2, 3])) == 2
		assert R.degree(R.zero()) == float('-inf')
		assert R.valuation(R([0, 0, 3])) == 2
		assert R.valuation(R.zero()) is Infinite
		assert R.ed_norm(R([0, 0, 3])) == 2
		assert R.ed_norm(R([1])) == 0
		assert R.leading_coefficient(R([1, 2, 3])) == 3

		try:
			R.leading_coefficient(R.zero())
		except ValueError:
			pass
		else:
			assert False, "Leading coefficient of zero should raise ValueError."

		assert R.shift(R([1, 2, 3]), -1) == R([2, 3])
		assert R.shift(R([1, 2]), 2) == R([0, 0, 1, 2])
		assert R.shift(R([1, 2]), -5) == R.zero()
		assert R.shift(R.zero(), 3) == R.zero()
		assert R.from_valuation(3) == R([0, 0, 0, 1])
		assert R.from_valuation(Infinite) == R.zero()
		assert R.residue(R([3, 1])) == 3
		assert R.residue(R.zero()) == 0

	def test_polynomial_division():
		R = PolynomialRing(FiniteField(5))

		assert R.divmod(R([1, 2, 1]), R([1, 1])) == (R([1, 1]), R.zero())
		assert R.divmod(R([1, 2, 3]), R([0, 1])) == (R([2, 3]), R([1]))
		assert R.divmod(R([1, 1]), R([1, 2, 3])) == (R.zero(), R([1, 1]))
		assert divmod(R([1, 2, 1]), R([1, 1])) == (R([1, 1]), R.zero())
		assert R([1, 2, 1]) // R([1, 1]) == R([1, 1])
		assert R([1, 2, 1]) % R([1, 1]) == R.zero()

		g = R.gcd(R([1, 2, 1]), R([1, 3, 2]))
		assert R.degree(g) == 1
		assert R.multiply_by_scalar(g, R.field.invert(R.leading_coefficient(g))) == R([1, 1])

		try:
			R.divmod(R([1]), R.zero())
		except ZeroDivisionError:
			pass
		else:
			assert False, "Division by zero polynomial should raise ZeroDivisionError."

		assert R.inverse_mod(R([1, 1]), R([0, 0, 1])) == R([1, 4])
		try:
			R.inverse_mod(R([0, 1]), R([0, 0, 1]))
		except ArithmeticError:
			pass
		else:
			assert False, "x is not invertible modulo x^2."

	def test_polynomial_display():
		R = PolynomialRing(FiniteField(5))
		assert R.to_string(R([1, 2, 0, 4])) == '1 + 2x + 4x^3'
		assert R.to_latex(R([1, 2, 0, 4])) == '1 + 2x + 4x^{3}'
		assert R.to_string(R([0, 1, 1])) == 'x + x^2'
		assert R.to_string(R.zero()) == '0'
		assert R.to_latex(R.zero()) == '0'
		assert str(R([2])) == '2'
		assert R.to_string() == 'F₅[x]'

	def test_polynomial_axioms():
		for p in [2, 3]:
			R = PolynomialRing(FiniteField(p))
			elements = list(R.domain(6 // p))
			for x, y, z in product(elements, repeat=3):
				ring_axioms(R, x, y, z)
			for x, y in product(R.domain(3), R.domain(3)):
				euclidean_axioms(R, x, y)

	def polynomials_test_suite(verbose=False):
		if verbose: print("running test suite")
		if verbose: print(" arithmetic")
		test_polynomial_arithmetic()
		if verbose: print(" measures")
		test_polynomial_measures()
		if verbose: print(" division")
		test_polynomial_division()
		if verbose: print(" display")
		test_polynomial_display()
		if verbose: print(" axioms")
		test_polynomial_axioms()


if __debug__ and __name__ == '__main__':
	polynomials_test_suite(verbose=True)
