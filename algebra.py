#!/usr/bin/python3


"Algebraic structures as objects, and the monoids and groups every ring carries."


__all__ = 'AlgebraicStructure', 'Element', 'Monoid', 'Group', 'RingAdditiveGroup', 'RingMultiplicativeMonoid', 'FieldMultiplicativeGroup'


class AlgebraicStructure:
	"Base class of algebras. Two structures are equal when they are of the same class and have equal parameters."

	algebra_params_names = ()

	def algebra_params(self):
		return tuple(getattr(self, _name) for _name in self.algebra_params_names)

	def __eq__(self, other):
		if self is other:
			return True
		if not isinstance(other, AlgebraicStructure):
			return NotImplemented
		return type(self) == type(other) and self.algebra_params() == other.algebra_params()

	def __ne__(self, other):
		result = self.__eq__(other)
		if result is NotImplemented:
			return result
		return not result

	def __hash__(self):
		return hash((self.__class__.__name__,) + self.algebra_params())

	def __repr__(self):
		return self.__class__.__name__ + '(' + ', '.join(repr(_param) for _param in self.algebra_params()) + ')'

	def __str__(self):
		return self.to_string()

	def to_string(self):
		return repr(self)


class Element:
	"Value owned by an algebraic structure `self.algebra`. Operators delegate to the structure, ints are coerced with `from_int`."

	__slots__ = ()

	def coerce(self, other):
		try:
			algebra = other.algebra
		except AttributeError:
			if isinstance(other, int):
				return self.algebra.from_int(other)
			return NotImplemented

		if algebra != self.algebra:
			return NotImplemented
		return other

	def __bool__(self):
		return not self.algebra.is_zero(self)

	def __str__(self):
		return self.algebra.to_string(self)

	def __add__(self, other):
		other = self.coerce(other)
		if other is NotImplemented:
			return NotImplemented
		return self.algebra.add(self, other)

	def __radd__(self, other):
		other = self.coerce(other)
		if other is NotImplemented:
			return NotImplemented
		return self.algebra.add(other, self)

	def __sub__(self, other):
		other = self.coerce(other)
		if other is NotImplemented:
			return NotImplemented
		return self.algebra.subtract(self, other)

	def __rsub__(self, other):
		other = self.coerce(other)
		if other is NotImplemented:
			return NotImplemented
		return self.algebra.subtract(other, self)

	def __neg__(self):
		return self.algebra.negate(self)

	def __pos__(self):
		return self

	def __mul__(self, other):
		other = self.coerce(other)
		if other is NotImplemented:
			return NotImplemented
		return self.algebra.multiply(self, other)

	def __rmul__(self, other):
		other = self.coerce(other)
		if other is NotImplemented:
			return NotImplemented
		return self.algebra.multiply(other, self)

	def __pow__(self, n):
		if not isinstance(n, int):
			return NotImplemented
		return self.algebra.pow(self, n)


class Monoid(AlgebraicStructure):
	"Base class of monoids. Subclasses provide `identity` and `multiply`."

	def identity(self):
		raise NotImplementedError

	def multiply(self, a, b):
		raise NotImplementedError

	def equals(self, a, b):
		return a == b

	def is_identity(self, a):
		return self.equals(a, self.identity())

	def pow(self, g, n):
		"Binary exponentiation, `n` must not be negative."

		if n < 0:
			raise ValueError(f"Negative exponent {n} in a monoid.")

		result = self.identity()
		while n:
			if n & 1:
				result = self.multiply(result, g)
			n >>= 1
			if n:
				g = self.multiply(g, g)
		return result


class Group(Monoid):
	"Monoid with `invert`. Negative powers are powers of the inverse."

	def invert(self, a):
		raise NotImplementedError

	def pow(self, g, n):
		if n < 0:
			return super().pow(self.invert(g), -n)
		return super().pow(g, n)


class RingAdditiveGroup(Group):
	algebra_params_names = ('ring',)

	def __init__(self, ring):
		self.ring = ring

	def identity(self):
		return self.ring.zero()

	def multiply(self, a, b):
		return self.ring.add(a, b)

	def invert(self, a):
		return self.ring.negate(a)

	def equals(self, a, b):
		return self.ring.equals(a, b)


class RingMultiplicativeMonoid(Monoid):
	algebra_params_names = ('ring',)

	def __init__(self, ring):
		self.ring = ring

	def identity(self):
		return self.ring.one()

	def multiply(self, a, b):
		return self.ring.multiply(a, b)

	def equals(self, a, b):
		return self.ring.equals(a, b)


class FieldMultiplicativeGroup(RingMultiplicativeMonoid, Group):
	"Multiplicative group of a field. The caller keeps zero out of it."

	def invert(self, a):
		return self.ring.invert(a)


if __debug__:
	class StringMonoid(Monoid):
		"Free monoid on characters, for testing exponentiation."

		def identity(self):
			return ""

		def multiply(self, a, b):
			return a + b

	class Cyclic(Group):
		"Additive cyclic group of a given order."

		algebra_params_names = ('order',)

		def __init__(self, order):
			self.order = order

		def identity(self):
			return 0

		def multiply(self, a, b):
			return (a + b) % self.order

		def invert(self, a):
			return (-a) % self.order

	def test_monoid_pow():
		M = StringMonoid()
		assert M.pow("ab", 0) == ""
		assert M.is_identity(M.pow("ab", 0))
		for n in range(20):
			assert M.pow("ab", n) == "ab" * n
			assert M.pow("x", n) == "x" * n

		try:
			M.pow("ab", -1)
		except ValueError:
			pass
		else:
			assert False, "Negative power in a monoid should raise ValueError."

	def test_group_pow():
		G = Cyclic(7)
		for g in range(7):
			for n in range(-15, 15):
				assert G.pow(g, n) == (g * n) % 7
			assert G.multiply(g, G.invert(g)) == G.identity()

	def test_structure_equality():
		assert Cyclic(7) == Cyclic(7)
		assert Cyclic(7) != Cyclic(5)
		assert hash(Cyclic(7)) == hash(Cyclic(7))
		assert StringMonoid() == StringMonoid()
		assert Cyclic(7) != StringMonoid()
		assert repr(Cyclic(7)) == 'Cyclic(7)'
		assert len({Cyclic(3), Cyclic(3), Cyclic(4)}) == 2


if __debug__ and __name__ == '__main__':
	test_monoid_pow()
	test_group_pow()
	test_structure_equality()
