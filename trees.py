#!/usr/bin/python3


"Trees given by a neighbor relation, and rooted snapshots of them."


__all__ = 'Adj', 'Step', 'RootedTree', 'UnrootedTree', 'make_tree', 'map_tree', 'walk_tree'


from collections import namedtuple


Adj = namedtuple('Adj', 'vertex edge')
Adj.__doc__ = "Neighbor `vertex` reached through the edge labelled `edge`."

Step = namedtuple('Step', 'value stop')
Step.__doc__ = "Traversal state returned by a visitor. `stop` prunes the subtree below the visited edge."

RootedTree = namedtuple('RootedTree', 'value forest')


def make_tree(children, root, depth):
	"Rooted tree of the given depth, where `children(value)` lists the children of a node."
	if depth <= 0:
		return RootedTree(root, [])
	return RootedTree(root, [make_tree(children, _child, depth - 1) for _child in children(root)])


def map_tree(f, tree):
	return RootedTree(f(tree.value), [map_tree(f, _subtree) for _subtree in tree.forest])


def walk_tree(tree):
	"Yield the values of a rooted tree in preorder."
	yield tree.value
	for subtree in tree.forest:
		yield from walk_tree(subtree)


class UnrootedTree:
	"Tree stored as an undirected neighbor relation. Subclasses provide `neighbors`, `reverse_edge` and `path`."

	def neighbors(self, vertex):
		"List of `Adj` for every neighbor of `vertex`."
		raise NotImplementedError

	def reverse_edge(self, parent, child, edge):
		"Label of the edge leading from `child` back to `parent`, where `edge` leads from `parent` to `child`."
		raise NotImplementedError

	def path(self, a, b):
		"List of `Adj` steps leading from `a` to `b`."
		raise NotImplementedError

	def equals(self, a, b):
		return a == b

	def reverse(self, parent, adj):
		return Adj(parent, self.reverse_edge(parent, adj.vertex, adj.edge))

	def reduce_path(self, f, a, b, init):
		"Fold `f(state, adj)` over the steps of the path from `a` to `b`."
		state = init
		for adj in self.path(a, b):
			state = f(state, adj)
		return state

	def iter(self, visitor, init, start):
		"""
		Depth first traversal of every edge reachable from `start`, never stepping back to the parent.
		The visitor is called as `visitor(value, vertex, adj)` and returns the pair `(value, stop)` passed down to the subtree below `adj`. A true `stop` skips that subtree.
		"""

		def visit(state, vertex, parent):
			if state.stop:
				return
			for adj in self.neighbors(vertex):
				if parent is not None and self.equals(adj.vertex, parent):
					continue
				visit(Step(*visitor(state.value, vertex, adj)), adj.vertex, vertex)

		visit(Step(init, False), start, None)

	def iter_vertices(self, predicate, start):
		"Yield the vertices reachable from `start` through vertices satisfying `predicate`, never stepping back to the parent."

		def visit(vertex, parent):
			yield vertex
			for adj in self.neighbors(vertex):
				if parent is not None and self.equals(adj.vertex, parent):
					continue
				if predicate(adj.vertex):
					yield from visit(adj.vertex, vertex)

		if predicate(start):
			yield from visit(start, None)

	def make(self, depth, start):
		"Rooted snapshot of the ball of radius `depth` around `start`, with `Adj` values. The root has no edge label."

		def grow(adj, parent, depth):
			if depth <= 0:
				return RootedTree(adj, [])
			forest = []
			for child in self.neighbors(adj.vertex):
				if parent is not None and self.equals(child.vertex, parent):
					continue
				forest.append(grow(child, adj.vertex, depth - 1))
			return RootedTree(adj, forest)

		return grow(Adj(start, None), None, depth)


if __debug__:
	class Line(UnrootedTree):
		"The integers, each joined to its predecessor and successor."

		def neighbors(self, n):
			return [Adj(n - 1, -1), Adj(n + 1, 1)]

		def reverse_edge(self, parent, child, edge):
			return -edge

		def path(self, a, b):
			step = 1 if b > a else -1
			return [Adj(_n, step) for _n in range(a + step, b + step, step)]

	def test_rooted_tree():
		t = make_tree(lambda n: [2 * n, 2 * n + 1], 1, 2)
		assert list(walk_tree(t)) == [1, 2, 4, 5, 3, 6, 7]
		assert list(walk_tree(map_tree(lambda n: n * 10, t))) == [10, 20, 40, 50, 30, 60, 70]
		assert make_tree(lambda n: [n], 0, 0) == RootedTree(0, [])

	def test_unrooted_tree():
		L = Line()

		assert L.reverse(3, Adj(4, 1)) == Adj(3, -1)
		assert [_adj.vertex for _adj in L.path(2, 5)] == [3, 4, 5]
		assert L.reduce_path(lambda s, adj: s + adj.edge, 2, -3, 0) == -5

		visited = []
		def visitor(depth, vertex, adj):
			visited.append(adj.vertex)
			return depth + 1, depth + 1 >= 3
		L.iter(visitor, 0, 0)
		assert sorted(visited) == [-3, -2, -1, 1, 2, 3]

		visited.clear()
		def stop_right(value, vertex, adj):
			visited.append(adj.vertex)
			return value, adj.vertex > 0 or adj.vertex < -2
		L.iter(stop_right, None, 0)
		assert visited == [-1, -2, -3, 1]

		assert sorted(L.iter_vertices(lambda n: abs(n) <= 2, 0)) == [-2, -1, 0, 1, 2]
		assert list(L.iter_vertices(lambda n: n > 0, 0)) == []

		ball = L.make(2, 0)
		assert ball.value == Adj(0, None)
		assert [_adj.vertex for _adj in walk_tree(ball)] == [0, -1, -2, 1, 2]
		assert [_adj.edge for _adj in walk_tree(ball)] == [None, -1, -1, 1, 1]


if __debug__ and __name__ == '__main__':
	test_rooted_tree()
	test_unrooted_tree()
