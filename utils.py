#!/usr/bin/python3


__all__ = 'subscript', 'superscript', 'cached', 'is_prime'


subscripts = str.maketrans("0123456789", "₀₁₂₃₄₅₆₇₈₉")

def subscript(n):
	if not n >= 0: raise ValueError
	return str(n).translate(subscripts)


superscripts = str.maketrans("0123456789", "⁰¹²³⁴⁵⁶⁷⁸⁹")

def superscript(n):
	if not n >= 0: raise ValueError
	return str(n).translate(superscripts)


def cached(old_method):
	"Memoize a method per instance, keyed by its positional arguments. Recomputing yields an equal value, so concurrent misses only duplicate work."

	name = '_cached_' + old_method.__name__

	def new_method(self, *args):
		try:
			return getattr(self, name)[args]
		except AttributeError:
			value = old_method(self, *args)
			setattr(self, name, {args: value})
			return value
		except KeyError:
			value = old_method(self, *args)
			getattr(self, name)[args] = value
			return value

	new_method.__name__ = old_method.__name__
	new_method.__qualname__ = old_method.__qualname__
	new_method.__doc__ = old_method.__doc__
	return new_method


def is_prime(n):
	"Trial division. Zero, one and negative numbers are not prime."

	if n < 2:
		return False
	if n < 4:
		return True
	if n % 2 == 0:
		return False

	d = 3
	while d * d <= n:
		if n % d == 0:
			return False
		d += 2
	return True


if __debug__:
	def test_scripts():
		assert subscript(17) == "₁₇"
		assert superscript(230) == "²³⁰"

		try:
			subscript(-1)
		except ValueError:
			pass
		else:
			assert False, "Negative subscript should raise ValueError."

	def test_cached():
		class Counter:
			def __init__(self):
				self.calls = 0

			@cached
			def square(self, n):
				self.calls += 1
				return n * n

		c = Counter()
		assert c.square(3) == 9
		assert c.square(3) == 9
		assert c.square(4) == 16
		assert c.calls == 2

		d = Counter()
		assert d.square(3) == 9
		assert d.calls == 1

	def test_is_prime():
		assert [_n for _n in range(-3, 30) if is_prime(_n)] == [2, 3, 5, 7, 11, 13, 17, 19, 23, 29]
		assert is_prime(7919)
		assert not is_prime(7917)


if __debug__ and __name__ == '__main__':
	test_scripts()
	test_cached()
	test_is_prime()
