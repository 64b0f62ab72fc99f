#!/usr/bin/python3


__all__ = 'Vector', 'Matrix', 'VectorSpace', 'MatrixAlgebra', 'DVVectorSpace'


from itertools import product
from typing import TypeVar, Iterable

from algebra import AlgebraicStructure
from rings import Ring
from order import eint
from utils import cached


Scalar = TypeVar('Scalar')


class Vector:
	"Immutable vector of field elements, owned by a `VectorSpace`."

	__slots__ = ('algebra', 'vector_values')

	def __init__(self, algebra, values:Iterable[Scalar]):
		self.algebra = algebra
		self.vector_values = tuple(values)

	def __repr__(self) -> str:
		return f'{self.__class__.__name__}({list(self.vector_values)!r})'

	def __str__(self) -> str:
		return self.algebra.to_string(self)

	def __len__(self) -> int:
		return len(self.vector_values)

	def __iter__(self):
		return iter(self.vector_values)

	def __getitem__(self, index:int) -> Scalar:
		return self.vector_values[index]

	def __eq__(self, other) -> bool:
		if not isinstance(other, Vector):
			return NotImplemented
		return self.algebra == other.algebra and self.vector_values == other.vector_values

	def __hash__(self):
		return hash(self.vector_values)

	def __bool__(self) -> bool:
		return not self.algebra.is_zero(self)

	def __add__(self, other):
		if not isinstance(other, Vector):
			return NotImplemented
		return self.algebra.add(self, other)

	def __sub__(self, other):
		if not isinstance(other, Vector):
			return NotImplemented
		return self.algebra.subtract(self, other)

	def __pos__(self):
		return self

	def __neg__(self):
		return self.algebra.negate(self)

	def __mul__(self, other):
		if isinstance(other, (Vector, Matrix)):
			return NotImplemented
		return self.algebra.scale(other, self)

	__rmul__ = __mul__

	def __matmul__(self, other):
		if not isinstance(other, Vector):
			return NotImplemented
		return self.algebra.inner_product(self, other)


class Matrix:
	"Immutable square matrix stored as a tuple of columns, owned by a `MatrixAlgebra`. Indexed `m[row, column]`."

	__slots__ = ('algebra', 'columns')

	def __init__(self, algebra, columns):
		self.algebra = algebra
		self.columns = tuple(tuple(_column) for _column in columns)

	def __repr__(self) -> str:
		return f'{self.__class__.__name__}({[list(_column) for _column in self.columns]!r})'

	def __str__(self) -> str:
		return self.algebra.to_string(self)

	def keys(self):
		yield from product(range(self.algebra.dimension), range(self.algebra.dimension))

	def values(self):
		for m, n in self.keys():
			yield self[m, n]

	def __getitem__(self, index:tuple[int, int]) -> Scalar:
		try:
			m, n = index
		except (TypeError, ValueError):
			raise IndexError("Matrix index must be a 2-tuple.")
		return self.columns[n][m]

	def __eq__(self, other) -> bool:
		if not isinstance(other, Matrix):
			return NotImplemented
		return self.algebra == other.algebra and self.columns == other.columns

	def __hash__(self):
		return hash(self.columns)

	def __bool__(self) -> bool:
		return not self.algebra.is_zero(self)

	def __add__(self, other):
		if not isinstance(other, Matrix):
			return NotImplemented
		return self.algebra.add(self, other)

	def __sub__(self, other):
		if not isinstance(other, Matrix):
			return NotImplemented
		return self.algebra.subtract(self, other)

	def __pos__(self):
		return self

	def __neg__(self):
		return self.algebra.negate(self)

	def __mul__(self, other):
		if isinstance(other, (Vector, Matrix)):
			return NotImplemented
		return self.algebra.scale(other, self)

	__rmul__ = __mul__

	def __matmul__(self, other):
		if isinstance(other, Matrix):
			return self.algebra.multiply(self, other)
		elif isinstance(other, Vector):
			return self.algebra.apply(self, other)
		else:
			return NotImplemented

	def __pow__(self, n:int):
		return self.algebra.pow(self, n)

	def transpose(self):
		return self.algebra.transpose(self)

	def inverse(self):
		return self.algebra.invert(self)

	def determinant(self):
		return self.algebra.determinant(self)

	def trace(self):
		return self.algebra.trace(self)


class VectorSpace(AlgebraicStructure):
	"The space of `dimension`-tuples of elements of `field`."

	algebra_params_names = ('dimension', 'field')

	def __init__(self, dimension, field):
		self.dimension = dimension
		self.field = field

	def make(self, values):
		values = tuple(values)
		if len(values) != self.dimension:
			raise ValueError(f"Vector length {len(values)} does not match dimension {self.dimension}.")
		return Vector(self, values)

	def __call__(self, values):
		return self.from_ints(values)

	@property
	@cached
	def matrix_algebra(self):
		return MatrixAlgebra(self)

	def zero(self):
		return self.make(self.field.zero() for _n in range(self.dimension))

	def basis(self, i):
		F = self.field
		return self.make(F.one() if _n == i else F.zero() for _n in range(self.dimension))

	def from_ints(self, values):
		if isinstance(values, Vector):
			return values
		return self.make(self.field.from_int(_x) if isinstance(_x, int) else _x for _x in values)

	def equals(self, a, b):
		return a == b

	def is_zero(self, a):
		return all(self.field.is_zero(_x) for _x in a)

	def add(self, a, b):
		F = self.field
		return self.make(F.add(_x, _y) for (_x, _y) in zip(a, b))

	def subtract(self, a, b):
		F = self.field
		return self.make(F.subtract(_x, _y) for (_x, _y) in zip(a, b))

	def negate(self, a):
		F = self.field
		return self.make(F.negate(_x) for _x in a)

	def scale(self, c, a):
		F = self.field
		if isinstance(c, int):
			c = F.from_int(c)
		return self.make(F.multiply(c, _x) for _x in a)

	def inner_product(self, a, b):
		F = self.field
		return F.sum(F.multiply(_x, _y) for (_x, _y) in zip(a, b))

	def cross(self, a, b):
		"Two-dimensional cross product `a[0] * b[1] - a[1] * b[0]`."
		if self.dimension != 2:
			raise NotImplementedError(f"Cross product not supported in dimension {self.dimension}.")
		F = self.field
		return F.subtract(F.multiply(a[0], b[1]), F.multiply(a[1], b[0]))

	def to_string(self, a=None):
		if a is None:
			return f'{self.field.to_string()}^{self.dimension}'
		return 'Vector[' + ', '.join(self.field.to_string(_x) for _x in a) + ']'


class MatrixAlgebra(Ring):
	"Square matrices acting on a vector space. Determinant and inverse are implemented up to dimension 2."

	algebra_params_names = ('vector_space',)

	def __init__(self, vector_space):
		self.vector_space = vector_space
		self.dimension = vector_space.dimension
		self.field = vector_space.field

	def check_dimension(self):
		if self.dimension > 2:
			raise NotImplementedError(f"Matrix operation not supported in dimension {self.dimension}.")

	def make(self, columns):
		columns = tuple(tuple(_column) for _column in columns)
		if len(columns) != self.dimension or any(len(_column) != self.dimension for _column in columns):
			raise ValueError(f"Matrix shape does not match dimension {self.dimension}.")
		return Matrix(self, columns)

	def __call__(self, columns):
		return self.from_ints(columns)

	def fill(self, f):
		"Matrix with `f(column, row)` at every position."
		d = self.dimension
		return Matrix(self, ((f(_col, _row) for _row in range(d)) for _col in range(d)))

	def map(self, f, m):
		return self.fill(lambda col, row: f(m[row, col]))

	def zero(self):
		zero = self.field.zero()
		return self.fill(lambda col, row: zero)

	def one(self):
		return self.from_scalar(self.field.one())

	def from_scalar(self, c):
		F = self.field
		zero = F.zero()
		return self.fill(lambda col, row: c if col == row else zero)

	def from_int(self, n):
		return self.from_scalar(self.field.from_int(n))

	def from_ints(self, columns):
		"Matrix from a list of columns of ints or field elements."
		if isinstance(columns, Matrix):
			return columns
		V = self.vector_space
		return self.make(V.from_ints(_column) for _column in columns)

	def column(self, m, i):
		return self.vector_space.make(m.columns[i])

	def row(self, m, i):
		return self.vector_space.make(_column[i] for _column in m.columns)

	def replace_column(self, m, i, v):
		return self.fill(lambda col, row: v[row] if col == i else m[row, col])

	def replace_row(self, m, i, v):
		return self.fill(lambda col, row: v[col] if row == i else m[row, col])

	def transpose(self, m):
		return self.fill(lambda col, row: m[col, row])

	def equals(self, a, b):
		return a == b

	def is_zero(self, m):
		F = self.field
		return all(F.is_zero(_x) for _x in m.values())

	def add(self, a, b):
		F = self.field
		return self.fill(lambda col, row: F.add(a[row, col], b[row, col]))

	def subtract(self, a, b):
		F = self.field
		return self.fill(lambda col, row: F.subtract(a[row, col], b[row, col]))

	def negate(self, m):
		return self.map(self.field.negate, m)

	def scale(self, c, m):
		F = self.field
		if isinstance(c, int):
			c = F.from_int(c)
		return self.map(lambda x: F.multiply(c, x), m)

	def multiply(self, a, b):
		F = self.field
		d = self.dimension
		return self.fill(lambda col, row: F.sum(F.multiply(a[row, _k], b[_k, col]) for _k in range(d)))

	def apply(self, m, v):
		F = self.field
		d = self.dimension
		return self.vector_space.make(F.sum(F.multiply(m[_row, _k], v[_k]) for _k in range(d)) for _row in range(d))

	def trace(self, m):
		return self.field.sum(m[_n, _n] for _n in range(self.dimension))

	def determinant(self, m):
		self.check_dimension()
		F = self.field
		if self.dimension == 0:
			return F.one()
		elif self.dimension == 1:
			return m[0, 0]
		else:
			return F.subtract(F.multiply(m[0, 0], m[1, 1]), F.multiply(m[0, 1], m[1, 0]))

	def is_singular(self, m):
		return self.field.is_zero(self.determinant(m))

	def invert(self, m):
		self.check_dimension()
		F = self.field
		det = self.determinant(m)
		if F.is_zero(det):
			raise ArithmeticError("Singular matrix has no inverse.")

		if self.dimension == 0:
			return m
		elif self.dimension == 1:
			return self.make([[F.invert(det)]])
		else:
			r = F.invert(det)
			return self.make([
				[F.multiply(m[1, 1], r), F.negate(F.multiply(m[1, 0], r))],
				[F.negate(F.multiply(m[0, 1], r)), F.multiply(m[0, 0], r)]
			])

	def non_zero_pow(self, m, n):
		if n < 0:
			return super().non_zero_pow(self.invert(m), -n)
		return super().non_zero_pow(m, n)

	def conjugate(self, m, p):
		"Returns `p ** -1 @ m @ p`."
		return self.multiply(self.invert(p), self.multiply(m, p))

	def is_scalar(self, m):
		F = self.field
		d = self.dimension
		return all(F.is_zero(m[_row, _col]) if _row != _col else F.equals(m[_row, _col], m[0, 0]) for (_row, _col) in product(range(d), range(d)))

	def is_eigenvector(self, m, v):
		return self.field.is_zero(self.vector_space.cross(v, self.apply(m, v)))

	def to_string(self, m=None):
		if m is None:
			return f'Mat{self.dimension}({self.field.to_string()})'
		d = self.dimension
		return 'Matrix[' + ', '.join('[' + ', '.join(self.field.to_string(m[_row, _col]) for _col in range(d)) + ']' for _row in range(d)) + ']'


class DVVectorSpace(VectorSpace):
	"Vector space over a discrete valuation field, with lattices given by matrices of generators (one per column)."

	def vector_in_valuation_ring(self, v):
		return all(self.field.in_valuation_ring(_x) for _x in v)

	def matrix_in_valuation_ring(self, m):
		return all(self.field.in_valuation_ring(_x) for _x in m.values())

	def min_valuation(self, values):
		"Smallest valuation among the entries of a vector or matrix."
		if isinstance(values, Matrix):
			values = values.values()
		return eint.min_all(self.field.valuation(_x) for _x in values)

	def in_lattice(self, generators, v):
		M = self.matrix_algebra
		return self.vector_in_valuation_ring(M.apply(M.invert(generators), v))

	def is_sublattice(self, sub, lattice):
		"Whether the lattice generated by `sub` lies inside the one generated by `lattice`."
		M = self.matrix_algebra
		return self.matrix_in_valuation_ring(M.multiply(M.invert(lattice), sub))

	def is_same_lattice(self, a, b):
		M = self.matrix_algebra
		return self.is_trivial_lattice(M.multiply(M.invert(a), b))

	def in_standard_tree(self, m):
		"Integral generators with at least one unit entry."
		return self.min_valuation(m) == 0

	def is_trivial_lattice(self, m):
		"Whether `m` generates the standard lattice, the valuation ring to the power of the dimension."
		return self.in_standard_tree(m) and self.field.valuation(self.matrix_algebra.determinant(m)) == 0


if __debug__:
	from fields import FiniteField
	from adic import Adic

	def test_vector_space():
		F = FiniteField(5)
		V = VectorSpace(2, F)

		a = V([1, 2])
		b = V([3, 4])
		assert a + b == V([4, 1])
		assert a - b == V([3, 3])
		assert -a == V([4, 3])
		assert 2 * a == V([2, 4])
		assert a * 3 == V([3, 1])
		assert a @ b == 1
		assert V.cross(a, b) == 3
		assert V.zero() == V([0, 0])
		assert not V.zero()
		assert a
		assert V.basis(1) == V([0, 1])
		assert str(a) == 'Vector[1, 2]'
		assert V == VectorSpace(2, FiniteField(5))
		assert V.matrix_algebra is V.matrix_algebra

		try:
			V([1, 2, 3])
		except ValueError:
			pass
		else:
			assert False, "Vector of wrong length should raise ValueError."

		try:
			VectorSpace(3, F).cross(V([1, 2]), V([1, 2]))
		except NotImplementedError:
			pass
		else:
			assert False, "Cross product in dimension 3 should raise NotImplementedError."

	def test_matrix_algebra():
		F = FiniteField(5)
		V = VectorSpace(2, F)
		M = V.matrix_algebra

		m = M([[1, 2], [3, 4]])
		assert m[0, 0] == 1 and m[1, 0] == 2 and m[0, 1] == 3 and m[1, 1] == 4
		assert M.column(m, 1) == V([3, 4])
		assert M.row(m, 1) == V([2, 4])
		assert M.replace_column(m, 0, V([0, 0])) == M([[0, 0], [3, 4]])
		assert M.replace_row(m, 0, V([0, 0])) == M([[0, 2], [0, 4]])
		assert m.transpose() == M([[1, 3], [2, 4]])
		assert M.trace(m) == 0
		assert m.determinant() == 3
		assert m @ V([1, 0]) == V([1, 2])
		assert M.apply(m, V([0, 1])) == V([3, 4])
		assert m @ M.one() == m
		assert M.one() @ m == m
		assert m @ m.inverse() == M.one()
		assert m.inverse() @ m == M.one()
		assert m ** 2 == m @ m
		assert m ** -1 == m.inverse()
		assert m ** 0 == M.one()
		assert M.from_int(3) == M([[3, 0], [0, 3]])
		assert M.from_int(3) == Ring.from_int(M, 3)
		assert M.scale(2, m) == M([[2, 4], [1, 3]])
		assert 2 * m == M.scale(2, m)
		assert M.conjugate(M.from_int(2), m) == M.from_int(2)
		assert M.is_scalar(M.from_int(4))
		assert not M.is_scalar(m)
		assert str(m) == 'Matrix[[1, 3], [2, 4]]'

		assert M.is_eigenvector(M([[2, 0], [0, 3]]), V([1, 0]))
		assert not M.is_eigenvector(M([[2, 0], [0, 3]]), V([1, 1]))

		s = M([[1, 2], [2, 4]])
		assert M.is_singular(s)
		try:
			M.invert(s)
		except ArithmeticError:
			pass
		else:
			assert False, "Inverting a singular matrix should raise ArithmeticError."

		elements = [M([[_a, _b], [_c, _d]]) for (_a, _b, _c, _d) in product(range(0, 5, 2), range(3), range(1, 5, 3), range(2))]
		for x, y, z in product(elements[::5], elements[1::4], elements[2::7]):
			assert (x + y) + z == x + (y + z)
			assert x + y == y + x
			assert x - x == M.zero()
			assert (x @ y) @ z == x @ (y @ z)
			assert x @ (y + z) == x @ y + x @ z
			assert (x + y) @ z == x @ z + y @ z
			assert M.one() @ x == x @ M.one() == x
			assert M.trace(x + y) == F.add(M.trace(x), M.trace(y))
			assert M.determinant(x @ y) == F.multiply(M.determinant(x), M.determinant(y))

	def test_small_dimensions():
		F = FiniteField(7)

		M1 = VectorSpace(1, F).matrix_algebra
		assert M1.determinant(M1([[3]])) == 3
		assert M1.invert(M1([[3]])) == M1([[5]])

		M0 = VectorSpace(0, F).matrix_algebra
		assert M0.determinant(M0([])) == 1
		assert M0.invert(M0([])) == M0([])

		M3 = VectorSpace(3, F).matrix_algebra
		m = M3.one()
		assert M3.multiply(m, m) == m
		for operation in M3.determinant, M3.invert:
			try:
				operation(m)
			except NotImplementedError:
				pass
			else:
				assert False, "Dimension 3 should raise NotImplementedError."

	def test_lattices():
		F = Adic(3)
		V = DVVectorSpace(2, F)
		M = V.matrix_algebra

		standard = M.one()
		assert V.is_trivial_lattice(standard)
		assert V.in_standard_tree(M([[3, 0], [1, 1]]))
		assert not V.is_trivial_lattice(M([[3, 0], [0, 1]]))
		assert V.is_trivial_lattice(M([[1, 1], [1, 2]]))
		assert not V.in_standard_tree(M([[3, 0], [0, 3]]))
		assert not V.matrix_in_valuation_ring(M([[F(1, 3), 0], [0, 1]]))
		assert V.min_valuation(M([[F(1, 3), 9], [0, 1]])) == -1
		assert V.min_valuation(V([9, 3])) == 1

		assert V.in_lattice(standard, V([1, 2]))
		assert not V.in_lattice(standard, V([F(1, 3), 2]))
		assert V.in_lattice(M([[3, 0], [0, 1]]), V([3, 1]))
		assert not V.in_lattice(M([[3, 0], [0, 1]]), V([1, 1]))

		assert V.is_sublattice(M([[3, 0], [0, 3]]), standard)
		assert not V.is_sublattice(standard, M([[3, 0], [0, 3]]))
		assert V.is_same_lattice(standard, M([[1, 1], [0, 1]]))
		assert not V.is_same_lattice(standard, M([[3, 0], [0, 1]]))

	def vectors_test_suite(verbose=False):
		if verbose: print("running test suite")
		if verbose: print("Vector space test.")
		test_vector_space()
		if verbose: print("Matrix algebra test.")
		test_matrix_algebra()
		test_small_dimensions()
		if verbose: print("Lattice test.")
		test_lattices()


if __debug__ and __name__ == '__main__':
	vectors_test_suite(verbose=True)
