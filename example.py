#!/usr/bin/env python3
"""
Example usage of the JSON graph engine.

This script builds a node graph from a configuration document, lays it
out, moves one field in the graph, and turns the edited graph back into JSON.
"""

import json
from json_graph import JSONGraphEngine, EdgeKind, connect


def main():
    """Main example function."""
    print("JSON Graph Example")
    print("=" * 50)

    sample_data = {
        "name": "Green Leaf Dispensary",
        "categories": [
            {
                "name": "Flower",
                "subcategories": ["Indica", "Sativa", "Hybrid"],
                "featured": True
            },
            {
                "name": "Edibles",
                "subcategories": ["Gummies", "Chocolates"],
                "featured": False
            }
        ],
        "meta": {
            "keywords": ["organic", "local"],
            "recommendedStructuredData": {"@type": "Store", "rating": 4.7}
        },
        "settings": {
            "theme": "dark",
            "maxItemsPerPage": 24
        }
    }

    engine = JSONGraphEngine()

    # Build and lay out the graph
    result = engine.build_and_layout(sample_data)
    metadata_edges = sum(1 for edge in result.edges if edge.kind == EdgeKind.METADATA_LINK)

    print(f"Nodes: {len(result.nodes)}")
    print(f"Edges: {len(result.edges)} ({metadata_edges} metadata links)")
    print("\nFirst nodes:")
    for node in result.nodes[:8]:
        print(f"   {node.path:<35} {node.display_value:<20} "
              f"({node.position.x:.0f}, {node.position.y:.0f})")

    # Round trip
    rebuilt = engine.reconstruct(result.nodes, result.edges)
    print(f"\nRound trip lossless: {'✅' if rebuilt == sample_data else '❌'}")

    # Move settings.theme under meta, as a user dragging a wire would
    by_path = {node.path: node for node in result.nodes}
    nodes, edges = connect(result.nodes, result.edges,
                           by_path["root.meta"].id, by_path["root.settings.theme"].id)

    print("\nAfter moving settings.theme under meta:")
    print(json.dumps(engine.reconstruct(nodes, edges), indent=2))

    # Relayout, keeping positions of nodes whose path did not change
    relaid = engine.layout(nodes, edges, previous=result.nodes)
    print(f"\nRe-laid out {len(relaid)} nodes")


if __name__ == "__main__":
    main()
