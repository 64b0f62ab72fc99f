#!/usr/bin/python3


"Integers extended with a positive infinity, the codomain of valuations."


__all__ = 'Infinite', 'Order', 'ExtendedIntOrder', 'eint'


class InfiniteType:
	"Type of the `Infinite` sentinel, greater than every integer. Only one instance exists."

	__slots__ = ()

	__instance = None

	def __new__(cls):
		if cls.__instance is None:
			cls.__instance = super().__new__(cls)
		return cls.__instance

	def __repr__(self):
		return 'Infinite'

	def __str__(self):
		return '∞'

	def __reduce__(self):
		return (InfiniteType, ())

	def __hash__(self):
		return hash(InfiniteType)

	def __eq__(self, other):
		return other is self

	def __ne__(self, other):
		return other is not self

	def __lt__(self, other):
		if other is self or isinstance(other, int):
			return False
		return NotImplemented

	def __le__(self, other):
		if other is self:
			return True
		elif isinstance(other, int):
			return False
		return NotImplemented

	def __gt__(self, other):
		if other is self:
			return False
		elif isinstance(other, int):
			return True
		return NotImplemented

	def __ge__(self, other):
		if other is self or isinstance(other, int):
			return True
		return NotImplemented

	def __add__(self, other):
		if other is self or isinstance(other, int):
			return self
		return NotImplemented

	__radd__ = __add__

	def __sub__(self, other):
		if isinstance(other, int):
			return self
		return NotImplemented

	def __mul__(self, other):
		if other is self or (isinstance(other, int) and other > 0):
			return self
		elif isinstance(other, int):
			raise ArithmeticError(f"Infinity multiplied by non-positive integer {other}.")
		return NotImplemented

	__rmul__ = __mul__

	def __floordiv__(self, other):
		if isinstance(other, int) and other > 0:
			return self
		elif isinstance(other, int):
			raise ArithmeticError(f"Infinity divided by non-positive integer {other}.")
		return NotImplemented


Infinite = InfiniteType()


class Order:
	"Total order given by `lte`. The remaining comparisons and min/max are derived from it."

	def lte(self, a, b):
		raise NotImplementedError

	def equals(self, a, b):
		return self.lte(a, b) and self.lte(b, a)

	def lt(self, a, b):
		return self.lte(a, b) and not self.lte(b, a)

	def gt(self, a, b):
		return self.lt(b, a)

	def gte(self, a, b):
		return self.lte(b, a)

	def min(self, a, b):
		return a if self.lte(a, b) else b

	def max(self, a, b):
		return b if self.lte(a, b) else a

	def min_all(self, values):
		values = iter(values)
		try:
			result = next(values)
		except StopIteration:
			raise ValueError("Minimum of an empty sequence.") from None
		for value in values:
			result = self.min(result, value)
		return result

	def max_all(self, values):
		values = iter(values)
		try:
			result = next(values)
		except StopIteration:
			raise ValueError("Maximum of an empty sequence.") from None
		for value in values:
			result = self.max(result, value)
		return result


class ExtendedIntOrder(Order):
	"Integers together with `Infinite` as the maximum."

	def lte(self, a, b):
		if b is Infinite:
			return True
		elif a is Infinite:
			return False
		else:
			return a <= b

	def equals(self, a, b):
		if a is Infinite or b is Infinite:
			return a is b
		return a == b

	def mul_int(self, a, n):
		"Multiply by a positive integer. Infinity absorbs."
		if a is Infinite:
			return Infinite
		return a * n

	def div_int(self, a, n):
		"Floor division by an integer. Infinity absorbs."
		if a is Infinite:
			return Infinite
		return a // n


eint = ExtendedIntOrder()


if __debug__:
	def test_infinite():
		assert Infinite is InfiniteType()
		assert 3 < Infinite
		assert not Infinite < 3
		assert Infinite >= -10 ** 100
		assert Infinite > 5
		assert Infinite <= Infinite
		assert not Infinite < Infinite
		assert Infinite == Infinite
		assert Infinite != 0
		assert min(4, Infinite) == 4
		assert max(4, Infinite) is Infinite
		assert sorted([Infinite, 2, -1]) == [-1, 2, Infinite]
		assert Infinite + 5 is Infinite
		assert 2 * Infinite is Infinite
		assert repr(Infinite) == 'Infinite'

	def test_extended_int_order():
		assert eint.lt(1, 2)
		assert eint.lt(1, Infinite)
		assert not eint.lt(Infinite, Infinite)
		assert eint.lte(Infinite, Infinite)
		assert not eint.lte(Infinite, 7)
		assert eint.gt(Infinite, 7)
		assert eint.gte(3, 3)

		assert eint.min(1, 2) == 1
		assert eint.min(Infinite, 2) == 2
		assert eint.max(1, 2) == 2
		assert eint.max(1, Infinite) is Infinite

		assert eint.mul_int(3, 2) == 6
		assert eint.mul_int(Infinite, 2) is Infinite
		assert eint.div_int(7, 2) == 3
		assert eint.div_int(-7, 2) == -4
		assert eint.div_int(Infinite, 2) is Infinite

		assert eint.min_all([5, Infinite, -2, 3]) == -2
		assert eint.max_all([5, -2, 3]) == 5
		assert eint.max_all([5, Infinite, 3]) is Infinite
		assert eint.min_all([Infinite]) is Infinite

		for operation in eint.min_all, eint.max_all:
			try:
				operation([])
			except ValueError:
				pass
			else:
				assert False, "Extremum of an empty sequence should raise ValueError."

		assert eint.equals(3, 3)
		assert eint.equals(Infinite, Infinite)
		assert not eint.equals(Infinite, 3)


if __debug__ and __name__ == '__main__':
	test_infinite()
	test_extended_int_order()
