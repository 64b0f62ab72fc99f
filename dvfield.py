#!/usr/bin/python3


"Discrete valuation fields realized as fraction fields of Euclidean domains."


__all__ = 'Quotient', 'Split', 'DVField'


from collections import namedtuple

from algebra import Element
from order import Infinite
from fields import Field, FiniteField
from utils import cached


Split = namedtuple('Split', 'u v')
Split.__doc__ = "Decomposition `u * π ** v` of a nonzero field element, with `u` a unit of the valuation ring."


class Quotient(Element):
	"Fraction `num / den` of elements of a valuation ring, always in the canonical form of its field."

	__slots__ = ('algebra', 'num', 'den')

	def __init__(self, algebra, num, den):
		self.algebra = algebra
		self.num = num
		self.den = den

	def __repr__(self):
		return f'{self.__class__.__name__}({self.num!r}, {self.den!r})'

	def __eq__(self, other):
		if self is other:
			return True
		if not isinstance(other, Quotient):
			return NotImplemented
		return self.num == other.num and self.den == other.den and self.algebra == other.algebra

	def __hash__(self):
		return hash((self.num, self.den))

	@property
	def valuation(self):
		return self.algebra.valuation(self)

	def __truediv__(self, other):
		other = self.coerce(other)
		if other is NotImplemented:
			return NotImplemented
		return self.algebra.divide(self, other)

	def __rtruediv__(self, other):
		other = self.coerce(other)
		if other is NotImplemented:
			return NotImplemented
		return self.algebra.divide(other, self)

	def __mod__(self, other):
		other = self.coerce(other)
		if other is NotImplemented:
			return NotImplemented
		return self.algebra.mod(self, other)


class DVField(Field):
	"""
	Fraction field of a Euclidean domain `valuation_ring` whose maximal ideal is generated by `uniformizer_int`.
	Subclasses provide `reduce`, the only way elements come into being, and `valuation_nonzero_int` and `split_nonzero_int` on the valuation ring.
	"""

	algebra_params_names = ('p',)

	def __init__(self, valuation_ring, uniformizer_int, p):
		self.valuation_ring = valuation_ring
		self.uniformizer_int = uniformizer_int
		self.p = p
		self.residue_field = FiniteField(p)

	def __call__(self, num, den=None):
		"Reduced fraction from plain values of the valuation ring."
		R = self.valuation_ring
		return self.reduce(num, R.one() if den is None else den)

	@property
	def residue_field_size(self):
		return self.p

	def reduce(self, num, den):
		raise NotImplementedError

	def valuation_nonzero_int(self, n):
		raise NotImplementedError

	def split_nonzero_int(self, n):
		"Returns `(m, v)` with `n = m * π ** v` and `m` not divisible by `π`."
		raise NotImplementedError

	def residue(self, r):
		"Image of an element of the valuation ring in the residue field."
		raise NotImplementedError

	def num(self, x):
		return x.num

	def den(self, x):
		return x.den

	def fraction_unsafe(self, num, den):
		"Wrap a fraction the caller knows to be in canonical form."
		return Quotient(self, num, den)

	def zero(self):
		R = self.valuation_ring
		return self.fraction_unsafe(R.zero(), R.one())

	def one(self):
		R = self.valuation_ring
		return self.fraction_unsafe(R.one(), R.one())

	def from_int(self, n):
		R = self.valuation_ring
		return self.fraction_unsafe(R.from_int(n), R.one())

	def from_integral(self, r):
		return self.reduce(r, self.valuation_ring.one())

	def is_zero(self, a):
		return self.valuation_ring.is_zero(a.num)

	def is_one(self, a):
		R = self.valuation_ring
		return R.is_one(a.num) and R.is_one(a.den)

	def add(self, a, b):
		R = self.valuation_ring
		return self.reduce(R.dot(a.num, b.num, b.den, a.den), R.multiply(a.den, b.den))

	def subtract(self, a, b):
		R = self.valuation_ring
		return self.reduce(R.subtract(R.multiply(a.num, b.den), R.multiply(b.num, a.den)), R.multiply(a.den, b.den))

	def negate(self, a):
		return self.fraction_unsafe(self.valuation_ring.negate(a.num), a.den)

	def multiply(self, a, b):
		R = self.valuation_ring
		return self.reduce(R.multiply(a.num, b.num), R.multiply(a.den, b.den))

	def unsafe_invert(self, a):
		return self.reduce(a.den, a.num)

	def unsafe_divide(self, a, b):
		R = self.valuation_ring
		return self.reduce(R.multiply(a.num, b.den), R.multiply(a.den, b.num))

	@property
	@cached
	def uniformizer(self):
		return self.fraction_unsafe(self.uniformizer_int, self.valuation_ring.one())

	def valuation(self, x):
		"Exponent of the uniformizer in `x`, `Infinite` for zero."
		if self.is_zero(x):
			return Infinite
		v = self.valuation_nonzero_int(x.num)
		if v > 0:
			return v
		return -self.valuation_nonzero_int(x.den)

	def in_valuation_ring(self, x):
		return self.valuation(x) >= 0

	def is_integer_unit(self, x):
		return self.valuation(x) == 0

	def integral_from_val(self, n):
		"Returns `π ** n` in the valuation ring, zero for `Infinite`."
		R = self.valuation_ring
		if n is Infinite:
			return R.zero()
		if n < 0:
			raise ValueError(f"Negative power {n} of the uniformizer is not integral.")
		return R.pow(self.uniformizer_int, n)

	def from_val(self, n):
		"Returns `π ** n` as a field element, zero for `Infinite`."
		R = self.valuation_ring
		if n is Infinite:
			return self.zero()
		if n >= 0:
			return self.fraction_unsafe(self.integral_from_val(n), R.one())
		else:
			return self.fraction_unsafe(R.one(), self.integral_from_val(-n))

	def split_nonzero(self, x):
		"Returns `Split(u, v)` with `x = u * π ** v` and `u` of valuation zero."
		if self.is_zero(x):
			raise ValueError("Zero has no unit part.")

		num, v = self.split_nonzero_int(x.num)
		if v > 0:
			return Split(self.fraction_unsafe(num, x.den), v)
		den, w = self.split_nonzero_int(x.den)
		return Split(self.fraction_unsafe(x.num, den), -w)

	def residue_of(self, x):
		"Image of a field element of the valuation ring in the residue field."
		if not self.in_valuation_ring(x):
			raise ValueError(f"{self.to_string(x)} is not in the valuation ring.")
		F = self.residue_field
		return F.divide(self.residue(x.num), self.residue(x.den))

	def integral_norm(self, r):
		"Size of a nonzero element of the valuation ring, as compared by `mod`."
		return self.valuation_ring.ed_norm(r)

	def mod(self, a, b):
		"""
		Remainder of `a` by `b` computed in the valuation ring after cross-multiplying denominators.
		This is a Euclidean remainder of the integral representatives, not a residue modulo an ideal of the local field.
		"""

		R = self.valuation_ring
		if self.is_zero(b):
			raise ZeroDivisionError(f"Remainder modulo zero in {self.to_string()}.")
		if self.is_zero(a):
			return a
		if R.is_one(a.den) and R.is_one(b.den):
			return self.from_integral(R.mod(a.num, b.num))

		int_a = R.multiply(a.num, b.den)
		int_b = R.multiply(b.num, a.den)
		if self.integral_norm(int_a) < self.integral_norm(int_b):
			return a
		return self.reduce(R.mod(int_a, int_b), R.multiply(a.den, b.den))

	def mod_pow(self, a, n):
		"The representative of `a` modulo `π ** n` whose expansion has no terms at `π ** n` or above."

		if self.is_zero(a):
			return a

		R = self.valuation_ring
		u, v = self.split_nonzero(a)
		if v >= n:
			return self.zero()

		q = self.integral_from_val(n - v)
		r = R.mod(R.multiply(u.num, R.inverse_mod(u.den, q)), q)
		return self.multiply(self.from_integral(r), self.from_val(v))

	def expansion(self, x, n):
		"Digits of the π-adic expansion of `x` in the residue field, from `π ** valuation(x)` up to `π ** (n - 1)`."

		if self.is_zero(x):
			return []

		digits = []
		previous = self.zero()
		for k in range(self.valuation(x), n):
			current = self.mod_pow(x, k + 1)
			digits.append(self.residue_of(self.divide(self.subtract(current, previous), self.from_val(k))))
			previous = current
		return digits

	def to_string(self, x=None):
		if x is None:
			return super().to_string()
		R = self.valuation_ring
		if R.is_one(x.den):
			return R.to_string(x.num)
		return f'{R.to_string(x.num)}/{R.to_string(x.den)}'

	def to_latex(self, x):
		R = self.valuation_ring
		if R.is_one(x.den):
			return R.to_latex(x.num)
		return f'\\frac{{{R.to_latex(x.num)}}}{{{R.to_latex(x.den)}}}'


if __debug__:
	from fields import field_axioms

	__all__ = __all__ + ('valuation_axioms', 'dvfield_axioms')

	def valuation_axioms(F, a, b):
		if F.is_zero(a) or F.is_zero(b):
			return

		va = F.valuation(a)
		vb = F.valuation(b)
		assert F.valuation(F.multiply(a, b)) == va + vb
		assert F.valuation(F.divide(a, b)) == va - vb

		s = F.add(a, b)
		assert F.valuation(s) >= min(va, vb)
		if va != vb:
			assert F.valuation(s) == min(va, vb)

	def dvfield_axioms(F, x, y, z):
		field_axioms(F, x, y, z)
		valuation_axioms(F, x, y)
		valuation_axioms(F, y, z)

		assert F.reduce(F.num(x), F.den(x)) == x
		assert F.in_valuation_ring(x) == (F.valuation(x) >= 0)

		if not F.is_zero(x):
			u, v = F.split_nonzero(x)
			assert F.valuation(u) == 0
			assert F.multiply(u, F.from_val(v)) == x

			for n in range(v - 1, v + 3):
				r = F.mod_pow(x, n)
				assert F.mod_pow(r, n) == r
				assert F.is_zero(r) or F.valuation(r) >= v
				assert F.valuation(F.subtract(x, r)) >= n

			for n in range(v, v + 3):
				assert F.expansion(x, n)[:n - v] == F.expansion(x, v + 3)[:n - v]
