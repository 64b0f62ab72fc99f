#!/usr/bin/python3
#-*- coding:utf-8 -*-


"JSON service answering questions about Bruhat-Tits trees. Vertices are addressed by the edge labels leading to them from the origin."


from flask import Flask, request, abort
import json

from adic import Adic, FunctionField
from bruhat_tits import BruhatTitsTree


app = Flask('bruhat_tits_demo')
app.config.from_mapping(MAX_DEPTH=6, MAX_PRIME=101, MAX_EDGES=2000)
app.config.from_prefixed_env('BRUHAT_TITS')


mime_type = {}
mime_type['txt'] = [('Content-Type', 'text/plain;charset=utf-8'), ('Cache-Control', 'no-store')]
mime_type['json'] = [('Content-Type', 'application/json;charset=utf-8'), ('Cache-Control', 'no-store')]


def make_error_handler(http_error):
	@app.errorhandler(http_error)
	def error_handler(error):
		return json.dumps({'error': http_error}), http_error, mime_type['json']
	error_handler.__name__ = f'error_{http_error}'
	return error_handler

for http_error in [400, 404, 405, 415, 422]:
	make_error_handler(http_error)


field_types = {}
field_types['Adic'] = Adic, ("p",)
field_types['FunctionField'] = FunctionField, ("p",)


def load_tree():
	field_type, args = json.loads(request.form['field'])
	p, = args
	if not isinstance(p, int) or not 2 <= p <= app.config['MAX_PRIME']:
		raise ValueError(f"Prime {p!r} out of range.")
	return BruhatTitsTree(field_types[field_type][0](p))


def load_vertex(T, key):
	edges = json.loads(request.form[key])
	if len(edges) > app.config['MAX_DEPTH']:
		raise ValueError(f"Vertex address longer than {app.config['MAX_DEPTH']} edges.")
	v = T.origin
	for edge in edges:
		if not isinstance(edge, int):
			raise ValueError(f"Edge label {edge!r} is not an integer.")
		v = T.follow(v, edge)
	return v


def load_matrix(T, key):
	"Matrix given as a list of columns. Entries are ints or `[numerator, denominator]` pairs of valuation ring elements."

	F = T.field

	def entry(value):
		if isinstance(value, int):
			return F.from_int(value)
		num, den = value
		return F(num, den)

	return T.matrix_algebra.make([entry(_value) for _value in _column] for _column in json.loads(request.form[key]))


def vertex_to_json(T, v):
	return {
		'vertex': T.vertex_to_string(v),
		'latex': T.vertex_to_latex(v),
		'level': v.n,
		'expansion': T.field.expansion(v.u, v.n),
		'edges': [_adj.edge for _adj in T.path(T.origin, v)]
	}


def subtree_to_json(T, tree):
	return {
		'edge': tree.value.edge,
		'vertex': vertex_to_json(T, tree.value.vertex),
		'children': [subtree_to_json(T, _subtree) for _subtree in tree.forest]
	}


def make_query_handler(handler):
	def query_handler():
		try:
			result = handler()
		except (KeyError, ValueError, TypeError, ArithmeticError) as error:
			app.logger.warning("%s: %s", handler.__name__, error)
			abort(400)
		return json.dumps(result), 200, mime_type['json']
	query_handler.__name__ = handler.__name__
	return query_handler


@app.route('/')
def index_txt():
	return __doc__, 200, mime_type['txt']


@app.route('/fields')
def fields():
	return json.dumps(list((_key, _value[1]) for (_key, _value) in field_types.items())), 200, mime_type['json']


@app.route('/vertex', methods=['POST'])
@make_query_handler
def vertex():
	T = load_tree()
	v = load_vertex(T, 'vertex')
	result = vertex_to_json(T, v)
	result['neighbors'] = [{'edge': _adj.edge, 'vertex': T.vertex_to_string(_adj.vertex)} for _adj in T.neighbors(v)]
	return result


@app.route('/path', methods=['POST'])
@make_query_handler
def path():
	T = load_tree()
	steps = T.path(load_vertex(T, 'source'), load_vertex(T, 'target'))
	return {
		'distance': len(steps),
		'steps': [{'edge': _adj.edge, 'vertex': T.vertex_to_string(_adj.vertex)} for _adj in steps]
	}


@app.route('/action', methods=['POST'])
@make_query_handler
def action():
	T = load_tree()
	m = load_matrix(T, 'matrix')
	v = load_vertex(T, 'vertex')
	return {
		'image': vertex_to_json(T, T.action(m, v)),
		'translation_distance': T.translation_distance(m, v),
		'length_of_image': T.length_of_image(m, v)
	}


@app.route('/isometry', methods=['POST'])
@make_query_handler
def isometry():
	T = load_tree()
	m = load_matrix(T, 'matrix')
	return {
		'translation_length': T.translation_length(m),
		'min_translation_distance': T.min_translation_distance(m),
		'is_reflection': T.is_reflection(m),
		'is_identity': T.is_identity(m),
		'min_translation_vertex': vertex_to_json(T, T.min_translation_vertex_near_origin(m))
	}


@app.route('/subtree', methods=['POST'])
@make_query_handler
def subtree():
	T = load_tree()
	v = load_vertex(T, 'vertex')
	depth = int(json.loads(request.form['depth']))
	if not 0 <= depth <= app.config['MAX_DEPTH']:
		raise ValueError(f"Depth {depth} out of range.")
	if sum((T.p + 1) * T.p ** (_k - 1) for _k in range(1, depth + 1)) > app.config['MAX_EDGES']:
		raise ValueError(f"Subtree of depth {depth} has more than {app.config['MAX_EDGES']} edges.")
	return subtree_to_json(T, T.make(depth, v))


if __debug__:
	def post(client, url, **form):
		return client.post(url, data={_key: json.dumps(_value) for (_key, _value) in form.items()})

	def test_fields():
		client = app.test_client()
		response = client.get('/fields')
		assert response.status_code == 200
		assert json.loads(response.data) == [['Adic', ['p']], ['FunctionField', ['p']]]
		assert client.get('/').status_code == 200
		assert client.get('/nowhere').status_code == 404

	def test_vertex():
		client = app.test_client()

		response = post(client, '/vertex', field=['Adic', [3]], vertex=[1, 0])
		assert response.status_code == 200
		result = json.loads(response.data)
		assert result['vertex'] == '1/1_2'
		assert result['latex'] == '\\left[1\\right]_{2}'
		assert result['level'] == 2
		assert result['expansion'] == [1, 0]
		assert result['edges'] == [1, 0]
		assert [_n['edge'] for _n in result['neighbors']] == [0, 1, 2, 3]
		assert result['neighbors'][3]['vertex'] == '1/1_1'

		result = json.loads(post(client, '/vertex', field=['FunctionField', [2]], vertex=[1, 1]).data)
		assert result['vertex'] == '1 + x_2'
		assert result['edges'] == [1, 1]

		result = json.loads(post(client, '/vertex', field=['Adic', [5]], vertex=[5, 5]).data)
		assert result['vertex'] == '0/1_-2'
		assert result['edges'] == [5, 5]

	def test_path():
		client = app.test_client()
		result = json.loads(post(client, '/path', field=['Adic', [3]], source=[], target=[1, 0]).data)
		assert result['distance'] == 2
		assert [_step['edge'] for _step in result['steps']] == [1, 0]
		assert result['steps'][-1]['vertex'] == '1/1_2'

		result = json.loads(post(client, '/path', field=['Adic', [3]], source=[1, 0], target=[2]).data)
		assert [_step['edge'] for _step in result['steps']] == [3, 3, 2]

	def test_action():
		client = app.test_client()

		response = post(client, '/action', field=['Adic', [3]], matrix=[[1, 0], [0, 3]], vertex=[])
		assert response.status_code == 200
		result = json.loads(response.data)
		assert result['image']['vertex'] == '0/1_1'
		assert result['image']['edges'] == [0]
		assert result['translation_distance'] == 1
		assert result['length_of_image'] == 1

		result = json.loads(post(client, '/action', field=['Adic', [3]], matrix=[[1, [1, 2]], [0, 1]], vertex=[]).data)
		assert result['image']['edges'] == []

		result = json.loads(post(client, '/isometry', field=['Adic', [3]], matrix=[[1, 0], [0, 3]]).data)
		assert result['translation_length'] == 1
		assert result['min_translation_distance'] == 1
		assert not result['is_reflection']
		assert not result['is_identity']
		assert result['min_translation_vertex']['edges'] == []

		result = json.loads(post(client, '/isometry', field=['FunctionField', [2]], matrix=[[0, [[0, 1], 1]], [1, 0]]).data)
		assert result['translation_length'] == 0
		assert result['is_reflection']

	def test_subtree():
		client = app.test_client()

		result = json.loads(post(client, '/subtree', field=['FunctionField', [2]], vertex=[], depth=2).data)
		assert result['edge'] is None
		assert result['vertex']['edges'] == []
		assert [_child['edge'] for _child in result['children']] == [0, 1, 2]
		assert all(len(_child['children']) == 2 for _child in result['children'])

		limit = app.config['MAX_EDGES']
		app.config['MAX_EDGES'] = 10
		try:
			assert post(client, '/subtree', field=['Adic', [3]], vertex=[], depth=2).status_code == 400
			assert post(client, '/subtree', field=['Adic', [3]], vertex=[], depth=1).status_code == 200
		finally:
			app.config['MAX_EDGES'] = limit

	def test_bad_requests():
		client = app.test_client()
		assert post(client, '/vertex', field=['Adic', [4]], vertex=[]).status_code == 400
		assert post(client, '/vertex', field=['Adic', [103]], vertex=[]).status_code == 400
		assert post(client, '/vertex', field=['Real', [3]], vertex=[]).status_code == 400
		assert post(client, '/vertex', field=['Adic', [3]], vertex=[4]).status_code == 400
		assert post(client, '/vertex', field=['Adic', [3]], vertex=[0] * 7).status_code == 400
		assert post(client, '/vertex', field=['Adic', [3]]).status_code == 400
		assert client.post('/vertex', data={'field': 'Adic', 'vertex': '[]'}).status_code == 400
		assert post(client, '/action', field=['Adic', [3]], matrix=[[1, 2], [2, 4]], vertex=[]).status_code == 400
		assert post(client, '/action', field=['Adic', [3]], matrix=[[1, [1, 0]], [0, 1]], vertex=[]).status_code == 400
		assert post(client, '/isometry', field=['FunctionField', [3]], matrix=[[[[1.5, 1], 1], 0], [0, 1]]).status_code == 400
		assert post(client, '/isometry', field=['Adic', [3]], matrix=[[1.5, 0], [0, 1]]).status_code == 400
		assert post(client, '/isometry', field=['Adic', [3]], matrix=[[[3, 2.0], 0], [0, 1]]).status_code == 400
		assert post(client, '/subtree', field=['Adic', [3]], vertex=[], depth=7).status_code == 400
		assert client.get('/vertex').status_code == 405

	def demo_test_suite(verbose=False):
		if verbose: print("running test suite")
		test_fields()
		if verbose: print(" vertex")
		test_vertex()
		if verbose: print(" path")
		test_path()
		if verbose: print(" action")
		test_action()
		if verbose: print(" subtree")
		test_subtree()
		test_bad_requests()


if __name__ == '__main__':
	app.run(debug=True)
