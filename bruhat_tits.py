#!/usr/bin/python3


"The Bruhat-Tits tree of a discrete valuation field and the action of 2x2 matrices on it."


__all__ = 'Vertex', 'BruhatTitsTree'


from collections import namedtuple

from algebra import AlgebraicStructure
from order import Infinite, eint
from dvfield import DVField
from vectors import DVVectorSpace
from trees import Adj, UnrootedTree
from utils import cached


Vertex = namedtuple('Vertex', 'u n')
Vertex.__doc__ = "Class of the lattice generated by the columns of `[[1, 0], [u, π ** n]]`. The expansion of `u` has no terms at `π ** n` or above."


class BruhatTitsTree(UnrootedTree, AlgebraicStructure):
	"""
	The (p + 1)-regular tree of homothety classes of lattices in the plane over `field`.
	Edges `0 .. p - 1` lead away from the end at infinity, one per residue class, and edge `p` leads towards it.
	Matrices act on lattices through their generators, columns being the generating vectors.
	"""

	algebra_params_names = ('field',)

	def __init__(self, field):
		if not isinstance(field, DVField):
			raise TypeError(f"Bruhat-Tits tree needs a discrete valuation field, got {field!r}.")
		self.field = field
		self.p = field.residue_field_size
		self.vector_space = DVVectorSpace(2, field)
		self.matrix_algebra = self.vector_space.matrix_algebra

	def to_string(self):
		return f'BruhatTitsTree[{self.field.to_string()}]'

	@property
	@cached
	def origin(self):
		return Vertex(self.field.zero(), 0)

	@property
	@cached
	def inf_end(self):
		F = self.field
		return self.vector_space.make([F.zero(), F.one()])

	def vertex(self, u, n):
		"Vertex at level `n` over `u`, truncating the expansion of `u`."
		return Vertex(self.field.mod_pow(u, n), n)

	def vertex_is_origin(self, v):
		return v.n == 0 and self.field.is_zero(v.u)

	def vertex_to_string(self, v):
		return f'{self.field.to_string(v.u)}_{v.n}'

	def vertex_to_latex(self, v):
		return f'\\left[{self.field.to_latex(v.u)}\\right]_{{{v.n}}}'

	def apply(self, v, i):
		"Neighbor further from the end at infinity, along the edge of residue class `i`."
		F = self.field
		return Vertex(F.add(v.u, F.multiply(F.from_int(i), F.from_val(v.n))), v.n + 1)

	def apply_inf(self, v):
		"Neighbor closer to the end at infinity."
		return Vertex(self.field.mod_pow(v.u, v.n - 1), v.n - 1)

	def follow(self, v, edge):
		if edge == self.p:
			return self.apply_inf(v)
		elif 0 <= edge < self.p:
			return self.apply(v, edge)
		else:
			raise ValueError(f"Edge label {edge} out of range [0, {self.p}].")

	def neighbors(self, v):
		return [Adj(self.apply(v, _i), _i) for _i in range(self.p)] + [Adj(self.apply_inf(v), self.p)]

	def reverse_edge(self, parent, child, edge):
		if edge != self.p:
			return self.p
		F = self.field
		return F.residue_of(F.divide(F.subtract(parent.u, child.u), F.from_val(child.n)))

	def path(self, a, b):
		"Steps from `a` to `b`: towards infinity until a common ancestor, then away from it along the expansion of `b.u`."

		F = self.field
		steps = []
		current, level = a.u, a.n

		retreat = F.valuation(F.subtract(b.u, a.u))
		while retreat < level or level > b.n:
			level -= 1
			current = F.mod_pow(current, level)
			steps.append(Adj(Vertex(current, level), self.p))

		while level < b.n:
			lifted = F.mod_pow(b.u, level + 1)
			edge = F.residue_of(F.divide(F.subtract(lifted, current), F.from_val(level)))
			level += 1
			current = lifted
			steps.append(Adj(Vertex(current, level), edge))

		return steps

	def distance(self, a, b):
		return len(self.path(a, b))

	def make(self, depth, start=None):
		return super().make(depth, self.origin if start is None else start)

	def vertex_to_mat(self, v):
		F = self.field
		return self.matrix_algebra.make([[F.one(), v.u], [F.zero(), F.from_val(v.n)]])

	def mat_to_vertex(self, m):
		"Canonical vertex of the lattice generated by the columns of a nonsingular matrix."

		F = self.field
		a, c = m[0, 0], m[1, 0]
		b, d = m[0, 1], m[1, 1]
		if F.valuation(a) > F.valuation(b):
			a, c, b, d = b, d, a, c

		va = F.valuation(a)
		if va is Infinite:
			raise ArithmeticError("Singular matrix does not generate a lattice.")

		c1 = F.divide(c, a)
		w = F.valuation(F.subtract(d, F.multiply(b, c1)))
		if w is Infinite:
			raise ArithmeticError("Singular matrix does not generate a lattice.")

		n = w - va
		return Vertex(F.mod_pow(c1, n), n)

	def to_int_vector(self, vec):
		"Scale a nonzero vector so that its entries are integral and one of them is a unit."
		V = self.vector_space
		k = V.min_valuation(vec)
		if k is Infinite:
			raise ValueError("Zero vector has no integral representative.")
		return V.scale(self.field.from_val(-k), vec)

	def to_int_matrix(self, m):
		"Scale a nonzero matrix so that its entries are integral and one of them is a unit."
		k = self.vector_space.min_valuation(m)
		if k is Infinite:
			raise ValueError("Zero matrix has no integral representative.")
		return self.matrix_algebra.scale(self.field.from_val(-k), m)

	def vertex_to_int_mat(self, v):
		return self.to_int_matrix(self.vertex_to_mat(v))

	def is_same_class(self, a, b):
		"Whether two generator matrices span homothetic lattices."
		M = self.matrix_algebra
		return self.vector_space.is_trivial_lattice(self.to_int_matrix(M.multiply(M.invert(a), b)))

	def action(self, m, v):
		return self.mat_to_vertex(self.matrix_algebra.multiply(m, self.vertex_to_mat(v)))

	def trace_det_valuations(self, m):
		F = self.field
		M = self.matrix_algebra
		vdet = F.valuation(M.determinant(m))
		if vdet is Infinite:
			raise ArithmeticError("Singular matrix does not act on the tree.")
		return F.valuation(M.trace(m)), vdet

	def translation_length(self, m):
		vtr, vdet = self.trace_det_valuations(m)
		if vtr is Infinite:
			return 0
		return max(vdet - 2 * vtr, 0)

	def is_reflection(self, m):
		"Whether `m` swaps the ends of an edge, fixing no vertex."
		vtr, vdet = self.trace_det_valuations(m)
		return eint.gt(eint.mul_int(vtr, 2), vdet) and vdet % 2 == 1

	def is_identity(self, m):
		"Whether `m` fixes every vertex, which holds exactly for scalar matrices."
		return self.matrix_algebra.is_scalar(m)

	def min_translation_distance(self, m):
		"Smallest displacement of a vertex under `m`."
		vtr, vdet = self.trace_det_valuations(m)
		return vdet - 2 * eint.min(vtr, vdet // 2)

	def distance_to_origin(self, m):
		"Distance from the origin to the vertex of the lattice generated by `m`."
		vdet = self.field.valuation(self.matrix_algebra.determinant(m))
		if vdet is Infinite:
			raise ArithmeticError("Singular matrix does not generate a lattice.")
		return vdet - 2 * self.vector_space.min_valuation(m)

	def translation_distance(self, m, v):
		"Distance between `v` and its image under `m`."
		return self.distance_to_origin(self.matrix_algebra.conjugate(m, self.vertex_to_mat(v)))

	def length_of_image(self, m, v):
		"Distance from the origin to the image of `v` under `m`."
		return self.distance_to_origin(self.matrix_algebra.multiply(m, self.vertex_to_mat(v)))

	def project_to_min_translation(self, m, vec):
		"Vertex of minimal displacement spanned by `vec` and its image under `m` scaled to integral trace and determinant."

		F = self.field
		M = self.matrix_algebra
		vtr, vdet = self.trace_det_valuations(m)
		mu = eint.min(vtr, vdet // 2)
		scaled = M.scale(F.from_val(-mu), m)
		return self.mat_to_vertex(M.make([vec, M.apply(scaled, vec)]))

	def min_translation_vertex_near_origin(self, m):
		"A vertex of minimal displacement under `m` close to the origin. Every vertex qualifies for scalar matrices."

		V = self.vector_space
		M = self.matrix_algebra
		candidates = []
		for probe in V([1, 0]), V([0, 1]), V([1, 1]):
			if M.is_eigenvector(m, probe):
				continue
			candidates.append(self.project_to_min_translation(m, probe))

		if not candidates:
			return self.origin
		return min(candidates, key=lambda _v: self.distance_to_origin(self.vertex_to_mat(_v)))

	def in_end(self, v, end):
		"Whether `v` lies on the ray from the origin towards the end given by the nonzero vector `end`."
		return self.vector_space.in_lattice(self.vertex_to_int_mat(v), self.to_int_vector(end))

	def in_inf_end(self, v):
		return self.field.is_zero(v.u) and v.n <= 0


if __debug__:
	from adic import Adic, FunctionField
	from trees import walk_tree

	def check_tree_regularity(T, depth):
		for v in T.iter_vertices(lambda w: T.distance(T.origin, w) <= depth, T.origin):
			adjs = T.neighbors(v)
			assert len(adjs) == T.p + 1
			assert len(set(_adj.vertex for _adj in adjs)) == T.p + 1
			assert [_adj.edge for _adj in adjs] == list(range(T.p + 1))

			for adj in adjs:
				assert T.mat_to_vertex(T.vertex_to_mat(adj.vertex)) == adj.vertex
				back = T.reverse(v, adj)
				assert T.follow(adj.vertex, back.edge) == v
				assert T.path(v, adj.vertex) == [adj]

	def check_paths(T, vertices):
		for a in vertices:
			for b in vertices:
				steps = T.path(a, b)
				assert T.reduce_path(lambda v, adj: T.follow(v, adj.edge), a, b, a) == b
				for previous, adj in zip([Adj(a, None)] + steps, steps):
					assert T.follow(previous.vertex, adj.edge) == adj.vertex
				assert T.distance(a, b) == T.distance(b, a)
				assert len(set(_adj.vertex for _adj in steps)) == len(steps)

	def check_action(T, m, vertices):
		M = T.matrix_algebra
		assert T.action(M.one(), T.origin) == T.origin

		length = T.translation_length(m)
		shortest = T.min_translation_distance(m)
		for v in vertices:
			image = T.action(m, v)
			assert T.translation_distance(m, v) == T.distance(v, image)
			assert T.translation_distance(m, v) >= shortest
			assert T.length_of_image(m, v) == T.distance(T.origin, image)
			assert T.is_same_class(M.multiply(m, T.vertex_to_mat(v)), T.vertex_to_mat(image))

		w = T.min_translation_vertex_near_origin(m)
		assert T.translation_distance(m, w) == shortest
		if length:
			assert shortest == length
			assert T.distance(w, T.action(m, w)) == length

	def test_adic_tree_basics():
		F = Adic(3)
		T = BruhatTitsTree(F)
		o = T.origin

		assert T.to_string() == 'BruhatTitsTree[3-adic Field]'
		assert str(T) == 'BruhatTitsTree[3-adic Field]'
		assert T == BruhatTitsTree(Adic(3))
		assert T.vertex_to_string(Vertex(F(5), 2)) == '5/1_2'
		assert T.vertex_to_latex(Vertex(F(5), 2)) == '\\left[5\\right]_{2}'
		assert not hasattr(T, '_cached_vertex_to_string') and not hasattr(T, '_cached_vertex_to_latex')
		assert T.vertex(F(14), 2) == Vertex(F(5), 2)
		assert T.vertex_is_origin(o)
		assert not T.vertex_is_origin(Vertex(F.zero(), 1))

		adjs = T.neighbors(o)
		assert [_adj.edge for _adj in adjs] == [0, 1, 2, 3]
		assert adjs[0].vertex == Vertex(F.zero(), 1)
		assert adjs[3].vertex == Vertex(F.zero(), -1)
		assert T.apply(o, 1) == Vertex(F(1), 1)
		assert T.apply_inf(T.apply(o, 1)) == o
		assert T.apply(Vertex(F(1), 1), 2) == Vertex(F(7), 2)
		assert T.apply_inf(Vertex(F(4, 9), 0)) == Vertex(F(1, 9), -1)
		assert T.apply_inf(Vertex(F(1, 3), 0)) == Vertex(F.zero(), -1)

		assert T.reverse_edge(o, adjs[1].vertex, 1) == 3
		assert T.reverse_edge(Vertex(F(1), 1), o, 3) == 1
		assert T.reverse_edge(Vertex(F(7), 2), Vertex(F(1), 1), 3) == 2

		try:
			T.follow(o, 4)
		except ValueError:
			pass
		else:
			assert False, "Edge 4 does not exist in the 3-adic tree."

		try:
			BruhatTitsTree(F.residue_field)
		except TypeError:
			pass
		else:
			assert False, "A finite field has no Bruhat-Tits tree."

	def test_adic_tree_matrices():
		F = Adic(3)
		T = BruhatTitsTree(F)
		M = T.matrix_algebra

		v = Vertex(F(2), 3)
		m = T.vertex_to_mat(v)
		assert m == M([[1, 2], [0, 27]])
		assert T.mat_to_vertex(m) == v
		assert T.vertex_to_int_mat(v)[0, 0] == F.one()
		assert T.vertex_to_int_mat(Vertex(F.zero(), -2)) == M([[9, 0], [0, 1]])

		assert T.mat_to_vertex(M([[0, 3], [1, 0]])) == Vertex(F.zero(), 1)
		assert T.mat_to_vertex(M([[5, 10], [0, 5]])) == T.origin
		assert T.mat_to_vertex(M([[1, F(1, 2)], [0, 1]])) == T.origin
		assert T.mat_to_vertex(M([[3, 1], [0, 1]])) == Vertex(F.zero(), -1)
		assert T.mat_to_vertex(M([[1, F(1, 3)], [0, 1]])) == Vertex(F(1, 3), 0)

		for singular in M([[1, 2], [2, 4]]), M([[0, 1], [0, 2]]), M.zero():
			try:
				T.mat_to_vertex(singular)
			except ArithmeticError:
				pass
			else:
				assert False, "Singular matrix should raise ArithmeticError."

		assert T.is_same_class(M([[1, 2], [0, 27]]), M([[5, 10], [0, 135]]))
		assert T.is_same_class(M([[1, 2], [0, 27]]), M([[1, 2], [1, 29]]))
		assert not T.is_same_class(M([[1, 2], [0, 27]]), M([[1, 1], [0, 27]]))

		assert T.to_int_vector(T.vector_space([F(1, 9), F(2, 3)])) == T.vector_space([1, 6])
		assert T.to_int_matrix(M([[9, 3], [0, 27]])) == M([[3, 1], [0, 9]])
		try:
			T.to_int_vector(T.vector_space.zero())
		except ValueError:
			pass
		else:
			assert False, "Zero vector should raise ValueError."

	def test_adic_tree_paths():
		F = Adic(3)
		T = BruhatTitsTree(F)
		o = T.origin

		target = Vertex(F(1), 2)
		steps = T.path(o, target)
		assert steps[-1].vertex == target
		assert [_adj.edge for _adj in steps] == [1, 0]
		assert T.path(o, o) == []
		assert [_adj.edge for _adj in T.path(target, Vertex(F(2), 1))] == [3, 3, 2]
		assert T.distance(Vertex(F(1, 3), 0), Vertex(F(1), 1)) == 3

		check_tree_regularity(T, 2)
		ball = list(T.iter_vertices(lambda w: T.distance(o, w) <= 2, o))
		assert len(ball) == 1 + 4 + 4 * 3
		check_paths(T, ball[::2])

		snapshot = T.make(2)
		assert snapshot.value.vertex == o
		assert len(list(walk_tree(snapshot))) == len(ball)
		assert set(_adj.vertex for _adj in walk_tree(snapshot)) == set(ball)

		edges = []
		T.iter(lambda depth, v, adj: (edges.append(adj) or depth + 1, depth + 1 >= 2), 0, o)
		assert len(edges) == 4 + 4 * 3

		assert T.in_inf_end(Vertex(F.zero(), -2))
		assert not T.in_inf_end(Vertex(F.zero(), 1))
		assert T.in_end(Vertex(F.zero(), -2), T.inf_end)
		assert T.in_end(o, T.inf_end)
		assert not T.in_end(Vertex(F.zero(), 1), T.inf_end)
		assert T.in_end(Vertex(F(1), 2), T.vector_space([1, 1]))
		assert T.in_end(Vertex(F(4), 2), T.vector_space([1, 4]))
		assert not T.in_end(Vertex(F(4), 2), T.vector_space([1, 1]))

	def test_adic_tree_action():
		F = Adic(3)
		T = BruhatTitsTree(F)
		M = T.matrix_algebra
		o = T.origin
		ball = list(T.iter_vertices(lambda w: T.distance(o, w) <= 2, o))

		diagonal = M([[1, 0], [0, 3]])
		assert T.translation_length(diagonal) == 1
		assert T.min_translation_distance(diagonal) == 1
		assert not T.is_reflection(diagonal)
		assert T.translation_distance(diagonal, o) == 1
		assert T.translation_distance(diagonal, Vertex(F(1), 1)) == 3
		assert T.min_translation_vertex_near_origin(diagonal) == o
		assert T.action(diagonal, o) == Vertex(F.zero(), 1)
		assert T.distance_to_origin(diagonal) == 1

		swap = M([[0, 3], [1, 0]])
		assert T.translation_length(swap) == 0
		assert T.is_reflection(swap)
		assert T.min_translation_distance(swap) == 1
		assert T.action(swap, o) == Vertex(F.zero(), 1)
		assert T.action(swap, Vertex(F.zero(), 1)) == o

		rotation = M([[0, 1], [-1, 0]])
		assert T.translation_length(rotation) == 0
		assert not T.is_reflection(rotation)
		assert T.min_translation_distance(rotation) == 0
		assert T.action(rotation, o) == o

		assert T.is_identity(M.one())
		assert T.is_identity(M.from_int(9))
		assert not T.is_identity(diagonal)
		assert T.min_translation_vertex_near_origin(M.from_int(9)) == o

		try:
			T.translation_length(M([[1, 2], [2, 4]]))
		except ArithmeticError:
			pass
		else:
			assert False, "Singular matrix should raise ArithmeticError."

		for m in [diagonal, swap, rotation, M([[2, 1], [1, 5]]), M([[9, 1], [3, 1]]), M([[1, 1], [F(1, 3), 2]]), M([[27, 0], [1, 1]])]:
			check_action(T, m, ball[::3])

		g = M([[1, 1], [3, 2]])
		m = M([[2, 1], [1, 5]])
		conjugate = M.multiply(g, M.multiply(m, M.invert(g)))
		for v in ball[::4]:
			assert T.translation_distance(conjugate, T.action(g, v)) == T.translation_distance(m, v)

	def test_function_field_tree():
		F = FunctionField(2)
		R = F.valuation_ring
		T = BruhatTitsTree(F)
		M = T.matrix_algebra

		assert T.p == 2
		assert T.to_string() == 'BruhatTitsTree[FunctionField]'

		v = Vertex(F([1, 1], [0, 1]), 1)
		assert T.vertex(v.u, v.n) == v
		assert T.vertex_to_string(v) == '(1 + x)/(x)_1'
		assert [T.vertex_to_string(_adj.vertex) for _adj in T.neighbors(v)] == ['(1 + x)/(x)_2', '(1 + x + x^2)/(x)_2', '1/(x)_0']
		assert T.vertex_to_latex(Vertex(F([1], [0, 1]), 0)) == '\\left[\\frac{1}{x}\\right]_{0}'

		assert T.inf_end == T.vector_space([F.zero(), F.one()])
		assert T.is_identity(M.one())
		assert not T.is_identity(M([[1, 0], [1, 1]]))

		x = F.uniformizer
		assert x == F(R([0, 1]))
		assert T.mat_to_vertex(M([[1, 0], [0, x]])) == Vertex(F.zero(), 1)
		assert T.mat_to_vertex(T.vertex_to_mat(v)) == v

		check_tree_regularity(T, 2)
		ball = list(T.iter_vertices(lambda w: T.distance(T.origin, w) <= 3, T.origin))
		assert len(ball) == 1 + 3 + 3 * 2 + 3 * 4
		check_paths(T, ball[::3])

		hyperbolic = M([[1, 0], [1, x]])
		assert T.translation_length(hyperbolic) == 1
		for m in [hyperbolic, M([[x, 1], [1, 0]]), M([[1, 1], [x, F([1, 1])]])]:
			check_action(T, m, ball[::4])

	def bruhat_tits_test_suite(verbose=False):
		if verbose: print("running test suite")
		if verbose: print("3-adic tree")
		test_adic_tree_basics()
		test_adic_tree_matrices()
		if verbose: print(" paths")
		test_adic_tree_paths()
		if verbose: print(" action")
		test_adic_tree_action()
		if verbose: print("function field tree")
		test_function_field_tree()


if __debug__ and __name__ == '__main__':
	profile = False
	if profile:
		from pycallgraph2 import PyCallGraph
		from pycallgraph2.output.graphviz import GraphvizOutput

		with PyCallGraph(output=GraphvizOutput(output_file='bruhat_tits.png')):
			bruhat_tits_test_suite()
	else:
		bruhat_tits_test_suite(verbose=True)
