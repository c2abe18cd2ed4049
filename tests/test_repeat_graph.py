import unittest
from collections import Counter

import networkx as nx

from asat_hor import HOR, RepeatGraph, StructuralError


LONG_HOR = (
    "S2C4H1L.5-14_8-9_3-14_8-9_3-14_8-14_8-9_3-14_8-9_3-14_8-9_3-14_8-9_3-14_8-10_4-14_8-9_3-14_8-14"
    "_8-9_3-14_8-9_3-14_8-9_3-14_8-9_3-14_8-9_3-19"
)


def _windows(seq, k):
    return Counter(tuple(seq[i:i + k]) for i in range(len(seq) - k + 1))


class RepeatGraphBuildTests(unittest.TestCase):
    def test_nodes_and_edges(self):
        graph = RepeatGraph(list("abcabca"), 3)
        self.assertEqual(graph.n_nodes, 3)
        self.assertEqual(graph.n_edges, 5)
        self.assertEqual(graph.node_ids, {1: ("a", "b"), 2: ("b", "c"), 3: ("c", "a")})
        self.assertEqual(graph.edges, {1: [2, 2], 2: [3, 3], 3: [1]})

    def test_counts(self):
        graph = RepeatGraph(list("abcabca"), 3)
        self.assertEqual(graph.counts[("a", "b")], 2)
        self.assertEqual(graph.counts[("c", "a")], 2)

    def test_k_must_be_at_least_two(self):
        with self.assertRaises(ValueError):
            RepeatGraph(list("abc"), 1)

    def test_from_kmers_requires_equal_lengths(self):
        with self.assertRaises(ValueError):
            RepeatGraph.from_kmers([("a", "b"), ("a", "b", "c")])
        with self.assertRaises(ValueError):
            RepeatGraph.from_kmers([])


class EulerianTests(unittest.TestCase):
    def test_walk(self):
        seq = list("abcabca")
        graph = RepeatGraph(seq, 3)
        self.assertTrue(graph.has_eulerian_walk())
        self.assertFalse(graph.has_eulerian_cycle())
        self.assertEqual(graph.node_ids[graph.head], ("a", "b"))
        self.assertEqual(graph.node_ids[graph.tail], ("c", "a"))

        path = graph.eulerian_walk_or_cycle()
        self.assertEqual(path[0], ("a", "b"))
        self.assertEqual(path[-1], ("c", "a"))
        self.assertEqual(RepeatGraph.spell(path), seq)

    def test_cycle(self):
        seq = list("abcab")
        graph = RepeatGraph(seq, 3)
        self.assertTrue(graph.has_eulerian_cycle())
        self.assertFalse(graph.has_eulerian_walk())

        path = graph.eulerian_walk_or_cycle()
        self.assertEqual(path, [("a", "b"), ("b", "c"), ("c", "a")])
        self.assertEqual(RepeatGraph.spell(path + path[:1]), seq)

    def test_not_eulerian(self):
        graph = RepeatGraph.from_kmers([("a", "b"), ("a", "c")])
        self.assertEqual(graph.n_neither, 1)
        self.assertFalse(graph.is_eulerian())
        with self.assertRaises(StructuralError):
            graph.eulerian_walk_or_cycle()

    def test_two_in_heavy_nodes_is_not_a_walk(self):
        graph = RepeatGraph.from_kmers([("a", "b"), ("c", "b"), ("b", "d")])
        self.assertFalse(graph.has_eulerian_walk())

    def test_disconnected(self):
        graph = RepeatGraph.from_kmers([("a", "b"), ("b", "a"), ("c", "d"), ("d", "c")])
        self.assertTrue(graph.has_eulerian_cycle())
        with self.assertRaises(StructuralError):
            graph.eulerian_walk_or_cycle()

    def test_graph_reusable_after_walk(self):
        graph = RepeatGraph(list("abcabca"), 3)
        edges = {src: list(dsts) for src, dsts in graph.edges.items()}
        first = graph.eulerian_walk_or_cycle()
        self.assertEqual(graph.edges, edges)
        self.assertEqual(graph.eulerian_walk_or_cycle(), first)

    def test_long_hor_reconstruction(self):
        labels = HOR.parse(LONG_HOR).monomer_labels()
        graph = RepeatGraph(labels, 7)
        self.assertTrue(graph.is_eulerian())

        path = graph.eulerian_walk_or_cycle()
        if graph.has_eulerian_cycle():
            path = path + path[:1]
        spelled = RepeatGraph.spell(path)
        self.assertEqual(len(spelled), len(labels))
        self.assertEqual(_windows(spelled, 7), _windows(labels, 7))

    def test_agrees_with_networkx(self):
        cases = [
            RepeatGraph(list("abcabca"), 3),
            RepeatGraph(list("abcab"), 3),
            RepeatGraph.from_kmers([("a", "b"), ("a", "c")]),
        ]
        for graph in cases:
            g = graph.to_networkx()
            self.assertEqual(g.number_of_edges(), graph.n_edges)
            self.assertEqual(nx.has_eulerian_path(g), graph.is_eulerian())
            self.assertEqual(nx.is_eulerian(g), graph.has_eulerian_cycle())


class FindCyclesTests(unittest.TestCase):
    def test_single_unit(self):
        graph = RepeatGraph([1, 2, 3, 1, 2, 3, 1, 2, 3, 4], 3)
        cycles = graph.find_cycles()
        self.assertEqual(len(cycles), 1)
        self.assertEqual(cycles[0].unit, [1, 2, 3])
        self.assertEqual(cycles[0].count, 3)
        self.assertEqual(len(cycles[0]), 3)

    def test_min_count_filters_starts(self):
        graph = RepeatGraph([1, 2, 3, 1, 2, 3, 1, 2, 3, 4], 3)
        self.assertEqual(graph.find_cycles(min_count=4), [])

    def test_no_cycle_in_linear_sequence(self):
        graph = RepeatGraph([1, 2, 3, 4, 5], 3)
        self.assertEqual(graph.find_cycles(min_count=1), [])

    def test_hor_labels(self):
        hor = HOR.parse("S1C1H1L.1-4_1-4_1-4")
        graph = RepeatGraph(hor.monomer_labels(), 3)
        cycles = graph.find_cycles()
        self.assertEqual([c.unit for c in cycles], [["1", "2", "3", "4"]])


if __name__ == "__main__":
    unittest.main()
