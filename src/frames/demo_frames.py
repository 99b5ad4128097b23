"""
Demo script for frame-based authoring.

Builds a small pizza ontology with the builders and group scopes of the
frames module, queries its hierarchy and prints it as Turtle.

HOW TO RUN:
From the src directory, run:
    python -m frames.demo_frames

This demo covers:
- Declaring classes, properties and individuals with frames
- Disjoint, inverse and covering groups
- Hierarchy queries and probe scopes
- Rendering the ontology as RDF
"""

import logging

from ontology import (
    ancestors, defontology, get_store, in_namespace, is_disjoint, is_superclass, with_probe_entities,
)

from .expressions import fact, label, owlcomment, owlsome, someonly
from .service import (
    as_disjoint, as_inverse, as_subclasses, individual, object_property, owlclass, with_suffix,
)


def demo_classes_and_groups():
    """Declare the pizza hierarchy."""
    print("=" * 70)
    print("1. CLASSES AND GROUPS")
    print("=" * 70)

    food = owlclass("Food", label=["Food", label("Essen", "de")])

    with as_inverse():
        has_topping = object_property("hasTopping", domain="Pizza", characteristic="inversefunctional")
        object_property("isToppingOf")
    print("✓ hasTopping and isToppingOf declared as inverses")

    topping = owlclass("PizzaTopping", subclass=food)
    with with_suffix("Topping"):
        with as_subclasses(topping, disjoint=True, cover=True):
            cheese = owlclass("Cheese")
            tomato = owlclass("Tomato")
            owlclass("Ham")
    print("✓ Toppings declared as disjoint, covering subclasses of PizzaTopping")

    with as_disjoint():
        pizza = owlclass("Pizza", subclass=[food, owlsome(has_topping, topping)])
        owlclass("PizzaBase", subclass=food)

    owlclass("Margherita", subclass=[pizza, someonly(has_topping, cheese, tomato)],
             comment=owlcomment("Cheese and tomato only"))
    print("✓ Margherita declared with a closure restriction")

    individual("myDinner", type="Margherita", fact=fact("hasTopping", "someMozzarella"))
    individual("someMozzarella", type=cheese)

    return pizza, cheese, tomato


def demo_queries(pizza, cheese, tomato):
    """Query the asserted hierarchy."""
    print("\n" + "=" * 70)
    print("2. HIERARCHY QUERIES")
    print("=" * 70)

    margherita = owlclass("Margherita")
    print(f"Ancestors of Margherita: {sorted(str(cls) for cls in ancestors(margherita))}")
    print(f"Margherita is a Pizza: {is_superclass(margherita, pizza)}")
    print(f"Cheese and Tomato disjoint: {is_disjoint(cheese, tomato)}")

    with with_probe_entities([
        ("probe", lambda bound: owlclass("ProbePizza", subclass=margherita)),
    ]) as probes:
        print(f"Probe is a Pizza: {is_superclass(probes['probe'], pizza)}")
    print("✓ Probe removed again")


def main():
    logging.basicConfig(level=logging.INFO)

    print("=" * 70)
    print("FRAME-BASED AUTHORING DEMO")
    print("=" * 70)

    with in_namespace("pizza"):
        onto = defontology("http://example.org/pizza", prefix="pizza:", comment="Demo pizza ontology")
        pizza, cheese, tomato = demo_classes_and_groups()
        demo_queries(pizza, cheese, tomato)

        stats = get_store().get_stats(onto)
        print(f"\n📊 {stats.total_classes} classes, {stats.total_object_properties} properties, "
              f"{stats.total_individuals} individuals, {stats.total_axioms} axioms")

        print("\n" + get_store().to_graph(onto).serialize(format="turtle"))


if __name__ == "__main__":
    main()
