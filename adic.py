#!/usr/bin/python3


"The p-adic rationals and the field of rational functions over a prime field, completed at x = 0."


__all__ = 'Adic', 'FunctionField'


from fractions import Fraction

from rings import IntegerRing
from fields import FiniteField
from polynomials import PolynomialRing
from dvfield import DVField


class Adic(DVField):
	"Rational numbers with the `p`-adic valuation. The valuation ring is the integers and the uniformizer is `p`."

	def __init__(self, p):
		super().__init__(IntegerRing(), p, p)

	def reduce(self, num, den):
		if not isinstance(num, int) or not isinstance(den, int):
			raise TypeError(f"Fraction terms must be integers, got {num!r} and {den!r}.")
		if den == 0:
			raise ZeroDivisionError(f"Zero denominator in {num}/{den}.")
		if num == 0:
			return self.fraction_unsafe(0, 1)
		if den < 0:
			num, den = -num, -den

		R = self.valuation_ring
		g = abs(R.gcd(num, den))
		return self.fraction_unsafe(num // g, den // g)

	def from_rational(self, r):
		r = Fraction(r)
		return self.fraction_unsafe(r.numerator, r.denominator)

	def to_fraction(self, x):
		return Fraction(x.num, x.den)

	def add(self, a, b):
		if a.den == 1 and b.den == 1:
			return self.fraction_unsafe(a.num + b.num, 1)
		return super().add(a, b)

	def subtract(self, a, b):
		if a.den == 1 and b.den == 1:
			return self.fraction_unsafe(a.num - b.num, 1)
		return super().subtract(a, b)

	def unsafe_invert(self, a):
		if a.num < 0:
			return self.fraction_unsafe(-a.den, -a.num)
		return self.fraction_unsafe(a.den, a.num)

	def valuation_nonzero_int(self, n):
		return self.split_nonzero_int(n)[1]

	def split_nonzero_int(self, n):
		if n == 0:
			raise ValueError("Zero has no unit part.")
		v = 0
		while n % self.p == 0:
			n //= self.p
			v += 1
		return n, v

	def residue(self, r):
		return self.residue_field.from_int(r)

	def to_string(self, x=None):
		if x is None:
			return f'{self.p}-adic Field'
		return f'{x.num}/{x.den}'

	def to_latex(self, x):
		if x.den == 1:
			return str(x.num)
		return f'\\frac{{{x.num}}}{{{x.den}}}'


class FunctionField(DVField):
	"Fractions of polynomials over the prime field with `p` elements, valued by the order of vanishing at x = 0. Denominators are monic."

	def __init__(self, p):
		ring = PolynomialRing(FiniteField(p))
		super().__init__(ring, ring.from_ints([0, 1]), ring.p)

	def coerce_integral(self, value):
		R = self.valuation_ring
		if isinstance(value, int):
			return R.from_int(value)
		return R.from_ints(value)

	def reduce(self, num, den):
		R = self.valuation_ring
		num = self.coerce_integral(num)
		den = self.coerce_integral(den)
		if R.is_zero(den):
			raise ZeroDivisionError(f"Zero denominator in ({R.to_string(num)})/0.")

		_, _, _, s, t = R.extended_gcd(num, den)
		c = R.field.invert(R.leading_coefficient(s))
		return self.fraction_unsafe(R.multiply_by_scalar(R.negate(t), c), R.multiply_by_scalar(s, c))

	def multiply(self, a, b):
		"Cancel common powers of x crosswise before multiplying, which keeps the degrees down."

		R = self.valuation_ring
		if R.is_zero(a.num) or R.is_zero(b.num):
			return self.zero()

		k = min(R.valuation(a.num), R.valuation(b.den))
		l = min(R.valuation(b.num), R.valuation(a.den))
		a_num, b_den = R.shift(a.num, -k), R.shift(b.den, -k)
		b_num, a_den = R.shift(b.num, -l), R.shift(a.den, -l)
		return self.reduce(R.multiply(a_num, b_num), R.multiply(a_den, b_den))

	def valuation_nonzero_int(self, n):
		return self.valuation_ring.valuation(n)

	def integral_norm(self, r):
		return self.valuation_ring.valuation(r)

	def split_nonzero_int(self, n):
		R = self.valuation_ring
		if R.is_zero(n):
			raise ValueError("Zero has no unit part.")
		v = R.valuation(n)
		return R.shift(n, -v), v

	def residue(self, r):
		return self.valuation_ring.residue(r)

	def to_string(self, x=None):
		if x is None:
			return 'FunctionField'

		R = self.valuation_ring
		if R.is_one(x.den):
			return R.to_string(x.num)

		num = R.to_string(x.num)
		if sum(1 for _c in x.num if _c) > 1:
			num = f'({num})'
		return f'{num}/({R.to_string(x.den)})'

	def to_latex(self, x):
		R = self.valuation_ring
		if R.is_one(x.den):
			return R.to_latex(x.num)
		return f'\\frac{{{R.to_latex(x.num)}}}{{{R.to_latex(x.den)}}}'


if __debug__:
	from itertools import product
	from order import Infinite
	from dvfield import Split, dvfield_axioms

	def test_adic_construction():
		assert Adic(3).p == 3
		assert Adic(3).residue_field_size == 3
		assert Adic(3) == Adic(3)
		assert Adic(3) != Adic(5)
		assert Adic(3) != FunctionField(3)

		for p in [0, 1, 4, -3]:
			try:
				Adic(p)
			except ValueError:
				pass
			else:
				assert False, f"Adic({p}) should raise ValueError."

		try:
			Adic(3.0)
		except TypeError:
			pass
		else:
			assert False, "Adic(3.0) should raise TypeError."

	def test_adic_arithmetic():
		F = Adic(3)
		assert F(4, -6) == F.fraction_unsafe(-2, 3)
		assert F(0, -6) == F.zero()
		assert F.add(F(1, 2), F(1, 3)) == F(5, 6)
		assert F.subtract(F(1, 2), F(1, 2)) == F.zero()
		assert F.multiply(F(2, 3), F(9, 4)) == F(3, 2)
		assert F.divide(F(2, 3), F(-4, 9)) == F(-3, 2)
		assert F.invert(F(-2, 3)) == F(-3, 2)
		assert F.negate(F(2, 3)) == F(-2, 3)
		assert F.from_int(-4) == F(-4)
		assert F.from_rational(Fraction(6, -4)) == F(-3, 2)
		assert F.to_fraction(F(5, 6)) == Fraction(5, 6)
		assert F(1, 2) + 1 == F(3, 2)
		assert 1 - F(1, 2) == F(1, 2)
		assert F(1, 2) / F(1, 4) == F(2)
		assert F(2, 3) ** -2 == F(9, 4)

		try:
			F(1, 0)
		except ZeroDivisionError:
			pass
		else:
			assert False, "Zero denominator should raise ZeroDivisionError."

		try:
			F.invert(F.zero())
		except ZeroDivisionError:
			pass
		else:
			assert False, "Inverse of zero should raise ZeroDivisionError."

	def test_adic_valuation():
		F = Adic(3)
		assert F.valuation(F(27)) == 3
		assert F.valuation(F(1, 27)) == -3
		assert F.valuation(F(5, 6)) == -1
		assert F.valuation(F.zero()) is Infinite
		assert F.in_valuation_ring(F(5, 2))
		assert not F.in_valuation_ring(F(5, 6))
		assert F.in_valuation_ring(F.zero())
		assert F.is_integer_unit(F(5, 2))
		assert not F.is_integer_unit(F(3, 2))

		assert F.uniformizer == F(3)
		assert F.integral_from_val(3) == 27
		assert F.integral_from_val(Infinite) == 0
		assert F.from_val(3) == F(27)
		assert F.from_val(-3) == F(1, 27)
		assert F.from_val(Infinite) == F.zero()
		assert F.from_integral(5) == F(5)

		assert F.split_nonzero(F(27, 2)) == Split(F(1, 2), 3)
		assert F.split_nonzero(F(1, 27)) == Split(F(1), -3)
		assert F.split_nonzero(F(-5, 18)) == Split(F(-5, 2), -2)

		assert F.residue(10) == 1
		assert F.residue(-7) == 2
		assert F.residue(3) == 0
		assert F.residue_of(F(1, 2)) == 2
		try:
			F.residue_of(F(1, 3))
		except ValueError:
			pass
		else:
			assert False, "1/3 has no residue in the 3-adic valuation ring."

	def test_adic_mod():
		F = Adic(3)
		assert F.mod(F(10), F(3)) == F(1)
		assert F.mod(F(7, 2), F(1, 3)) == F(1, 6)
		assert F.mod(F(1, 3), F(7, 2)) == F(1, 3)
		assert F(10) % F(3) == F(1)

		assert F.mod_pow(F(27), 2) == F.zero()
		assert F.mod_pow(F(10), 2) == F(1)
		assert F.mod_pow(F(-1), 2) == F(8)
		assert F.mod_pow(F(1, 2), 1) == F(2)
		assert F.mod_pow(F(1, 2), 2) == F(5)
		assert F.mod_pow(F(23, 18), -1) == F(1, 9)
		assert F.mod_pow(F(23, 18), 0) == F(7, 9)
		assert F.mod_pow(F.zero(), 4) == F.zero()

		assert F.expansion(F(1, 2), 4) == [2, 1, 1, 1]
		assert F.expansion(F(10, 9), 2) == [1, 0, 1, 0]
		assert F.expansion(F.zero(), 3) == []

	def test_adic_display():
		F = Adic(3)
		assert F.to_string() == '3-adic Field'
		assert str(F) == '3-adic Field'
		assert F.to_string(F.zero()) == '0/1'
		assert F.to_string(F(5, 6)) == '5/6'
		assert str(F(5, 6)) == '5/6'
		assert F.to_latex(F(5, 6)) == '\\frac{5}{6}'
		assert F.to_latex(F(-4)) == '-4'

	def test_adic_axioms():
		for p in [2, 3]:
			F = Adic(p)
			elements = [F(_n, _d) for _n in range(-3, 5) for _d in [1, 2, 3, 4, 9]]
			for x, y, z in product(elements[::3], elements[1::4], elements[2::5]):
				dvfield_axioms(F, x, y, z)

	def test_function_field_construction():
		F = FunctionField(3)
		R = F.valuation_ring
		assert F.p == 3
		assert F.uniformizer_int == R([0, 1])
		assert F.to_string() == 'FunctionField'

		for p in [0, 1, 6]:
			try:
				FunctionField(p)
			except ValueError:
				pass
			else:
				assert False, f"FunctionField({p}) should raise ValueError."

		for num, den in [([1.5, 1], 1), ([1, 1], [0.5]), (1.0, 1)]:
			try:
				F(num, den)
			except TypeError:
				pass
			else:
				assert False, f"Coefficients {num!r}, {den!r} are not integers."

	def test_function_field_arithmetic():
		F = FunctionField(3)
		R = F.valuation_ring

		a = F([1, 2])
		b = F([2, 1])
		assert a == F.fraction_unsafe(R([1, 2]), R([1]))
		assert F.from_int(4) == F.fraction_unsafe(R([1]), R([1]))
		assert F.add(a, b) == F.fraction_unsafe(R([]), R([1]))
		assert F.add(a, b) == F.zero()
		assert F.negate(a) == F.fraction_unsafe(R([2, 1]), R([1]))
		assert F.multiply(a, b) == F.reduce([2, 2, 2], [1])

		c = F([2, 2], [2, 0, 1])
		assert c.num == R([2])
		assert c.den == R([2, 1])
		assert F([2, 4], [2, 2]) == F([1, 2], [1, 1])
		assert F([0, 1], [0, 2]) == F(2)
		assert F([0, 0, 1], [0, 1, 1]) == F([0, 1], [1, 1])
		assert F.multiply(F([1], [0, 1]), F([0, 0, 1], [1, 1])) == F([0, 1], [1, 1])
		assert F.divide(F([1, 1]), F([1, 1])) == F.one()
		assert F.invert(F([0, 2])) == F.fraction_unsafe(R([2]), R([0, 1]))

		try:
			F([1], [])
		except ZeroDivisionError:
			pass
		else:
			assert False, "Zero denominator should raise ZeroDivisionError."

	def test_function_field_valuation():
		F = FunctionField(3)
		R = F.valuation_ring

		assert F.valuation(F([0, 0, 1])) == 2
		assert F.valuation(F([1], [0, 0, 1])) == -2
		assert F.valuation(F([0, 1, 1], [1, 1, 1])) == 1
		assert F.valuation(F.zero()) is Infinite
		assert F.integral_from_val(2) == R([0, 0, 1])
		assert F.from_val(-2) == F.fraction_unsafe(R([1]), R([0, 0, 1]))

		assert F.split_nonzero(F([0, 0, 1], [2])) == Split(F([1], [2]), 2)
		assert F.split_nonzero(F([1, 1], [0, 1, 2])) == Split(F([1, 1], [1, 2]), -1)

		assert F.mod(F([2, 0, 1]), F([1, 2])) == F.zero()
		assert F.mod(F([1, 1]), F([0, 1])) == F.one()
		assert F.mod(F([1, 1, 1], [1, 1]), F([0, 1], [1, 1])) == F([1, 1, 1], [1, 1])
		assert F.mod(F([0, 1], [1, 1]), F([1, 1, 1], [1, 1])) == F([0, 1], [1, 1])
		assert F.mod(F([0, 0, 0, 1], [1, 1]), F([1, 1, 1], [1, 1])) == F([1], [1, 1])
		assert F.mod_pow(F([0, 0, 1]), 2) == F.zero()
		assert F.mod_pow(F([1, 1, 1]), 2) == F([1, 1])
		assert F.mod_pow(F([1], [1, 1]), 3) == F([1, 2, 1])
		assert F.mod_pow(F([1, 1], [0, 1]), 1) == F([1, 1], [0, 1])
		assert F.mod_pow(F([1, 1], [0, 1]), 0) == F([1], [0, 1])

		assert F.residue(R([10])) == 1
		assert F.residue_of(F([2], [2, 1])) == 1
		assert F.expansion(F([1], [1, 1]), 3) == [1, 2, 1]

	def test_function_field_display():
		F = FunctionField(3)
		assert F.to_string(F.zero()) == '0'
		assert F.to_string(F([1, 2], [1, 1])) == '(1 + 2x)/(1 + x)'
		assert F.to_string(F([1], [0, 1])) == '1/(x)'
		assert F.to_string(F([0, 1, 2])) == 'x + 2x^2'
		assert F.to_latex(F([0, 1, 2])) == 'x + 2x^{2}'
		assert F.to_latex(F([1, 2], [1, 0, 1])) == '\\frac{1 + 2x}{1 + x^{2}}'

	def test_function_field_axioms():
		F = FunctionField(2)
		R = F.valuation_ring
		elements = [F.reduce(_n, _d) for _n in R.domain(3) for _d in R.domain(3) if not R.is_zero(_d)]
		for x, y, z in product(elements[::5], elements[1::7], elements[2::9]):
			dvfield_axioms(F, x, y, z)

	def adic_test_suite(verbose=False):
		if verbose: print("running test suite")
		if verbose: print()
		if verbose: print("test Adic(p)")
		test_adic_construction()
		test_adic_arithmetic()
		test_adic_valuation()
		test_adic_mod()
		test_adic_display()
		if verbose: print(" axioms")
		test_adic_axioms()
		if verbose: print()
		if verbose: print("test FunctionField(p)")
		test_function_field_construction()
		test_function_field_arithmetic()
		test_function_field_valuation()
		test_function_field_display()
		if verbose: print(" axioms")
		test_function_field_axioms()


if __debug__ and __name__ == '__main__':
	adic_test_suite(verbose=True)
