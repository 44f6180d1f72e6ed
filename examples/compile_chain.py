"""Build a model in Python, compile it and print the circuit.

Run with ``python examples/compile_chain.py``.
"""

from pathlib import Path

import qmrf

# A Markov random field over two binary variables that prefer to agree
model = qmrf.GraphModel(qmrf.GraphType.UNDIRECTED)
model.add_node(0, "Left")
model.add_node(1, "Right")
model.add_edge(0, 1, directed=False, potential=[[3.0, 1.0], [1.0, 3.0]])
model.set_node_potential(0, [1.0, 2.0])

result = qmrf.compile_model(model)

for clique in result.mrf.cliques:
    print(clique.nodes, clique.potential)

print()
print(result.circuit.describe())
print()
print(qmrf.emit_circuit(result.circuit, qmrf.Framework.QASM, name="agree"))

# The text format gives the same circuit as building the model by hand
chain = qmrf.parse_model_file(Path(__file__).parent / "chain.txt")
assert qmrf.compile_model(chain).circuit == qmrf.compile_model(qmrf.example_model()).circuit
