"""Tests for blueprints, generators and the blueprint registry."""

from dataclasses import dataclass

import pytest

from fixture_forge import (
    Association,
    AssociationError,
    Blueprint,
    BlueprintNotFoundError,
    Constant,
    Derived,
    ForgeConfig,
    Lazy,
    ObjectAdapter,
    Sequence,
    define_blueprint,
    default_registry,
    set_config,
)
from fixture_forge.blueprint import BlueprintRegistry, GeneratorKind, as_generator


@dataclass
class Animal:
    name: str = ""
    legs: int = 0


@dataclass
class Dog(Animal):
    breed: str = ""


# ---------------------------------------------------------------------------
# Blueprint
# ---------------------------------------------------------------------------

class TestBlueprint:
    """Test blueprint ordering and extension."""

    def test_keeps_declaration_order(self):
        bp = Blueprint(b=1, a=2, c=3)
        assert bp.names() == ["b", "a", "c"]

    def test_wraps_plain_values(self):
        bp = Blueprint(name="Rex")
        (_, generator), = bp.items()
        assert isinstance(generator, Constant)
        assert generator.kind == GeneratorKind.CONSTANT

    def test_accepts_pairs_and_mappings(self):
        assert Blueprint([("x", 1), ("y", 2)]).names() == ["x", "y"]
        assert Blueprint({"x": 1}, y=2).names() == ["x", "y"]

    def test_extend_adds_and_replaces(self):
        bp = Blueprint(name="Rex", legs=4)
        extended = bp.extend(name="Fido", breed="collie")
        assert extended.names() == ["name", "legs", "breed"]
        assert bp.names() == ["name", "legs"]
        assert dict(extended.items())["name"].value == "Fido"

    def test_container_protocol(self):
        bp = Blueprint(name="Rex")
        assert "name" in bp
        assert "legs" not in bp
        assert len(bp) == 1
        assert repr(bp) == "Blueprint(name)"


# ---------------------------------------------------------------------------
# Generators
# ---------------------------------------------------------------------------

class TestGenerators:
    """Test each generator kind."""

    def setup_method(self):
        self.adapter = ObjectAdapter()
        self.target = Animal()

    def test_constant_copies_containers(self):
        gen = Constant({"a": 1})
        first = gen.generate(self.target, "x", self.adapter)
        second = gen.generate(self.target, "x", self.adapter)
        assert first == second
        assert first is not second

    def test_constant_scalar_returned_as_is(self):
        value = object()
        assert Constant(value).generate(self.target, "x", self.adapter) is value

    def test_lazy_called_each_time(self):
        calls = []
        gen = Lazy(lambda: calls.append(1) or len(calls))
        assert gen.generate(self.target, "x", self.adapter) == 1
        assert gen.generate(self.target, "x", self.adapter) == 2

    def test_derived_receives_object(self):
        self.target.name = "Rex"
        gen = Derived(lambda animal: animal.name * 2)
        assert gen.generate(self.target, "x", self.adapter) == "RexRex"

    def test_sequence_counts_and_resets(self):
        gen = Sequence(lambda n: f"dog{n}", start=5)
        assert gen.generate(self.target, "name", self.adapter) == "dog5"
        assert gen.generate(self.target, "name", self.adapter) == "dog6"
        gen.reset()
        assert gen.generate(self.target, "name", self.adapter) == "dog5"

    def test_association_needs_target_without_metadata(self):
        with pytest.raises(AssociationError):
            Association().generate(self.target, "owner", self.adapter)

    def test_association_builds_target(self):
        define_blueprint(Dog, breed="collie")
        dog = Association(Dog, name="Lassie").generate(self.target, "friend", self.adapter)
        assert dog == Dog(name="Lassie", legs=0, breed="collie")

    def test_association_count_builds_list(self):
        define_blueprint(Dog)
        dogs = Association(Dog, count=3).generate(self.target, "pack", self.adapter)
        assert len(dogs) == 3
        assert all(isinstance(d, Dog) for d in dogs)

    def test_association_named_blueprint(self):
        define_blueprint(Dog)
        define_blueprint(Dog, "puppy", legs=4, name="Pup")
        dog = Association(Dog, blueprint="puppy").generate(self.target, "friend", self.adapter)
        assert dog.name == "Pup"

    def test_as_generator(self):
        gen = Lazy(lambda: 1)
        assert as_generator(gen) is gen
        assert isinstance(as_generator(3), Constant)


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

class TestRegistry:
    """Test blueprint registration and chain lookup."""

    def setup_method(self):
        self.registry = BlueprintRegistry()

    def test_register_and_lookup_default(self):
        bp = Blueprint(name="Rex")
        self.registry.register(Animal, bp)
        assert self.registry.lookup(Animal) is bp
        assert self.registry.lookup(Animal, "master") is bp

    def test_chain_named_first(self):
        default = self.registry.register(Animal, Blueprint(name="Any"))
        named = self.registry.register(Animal, Blueprint(legs=3), "tripod")
        assert self.registry.chain(Animal, "tripod") == [named, default]

    def test_chain_walks_base_classes(self):
        base = self.registry.register(Animal, Blueprint(legs=4))
        sub = self.registry.register(Dog, Blueprint(breed="pug"))
        assert self.registry.chain(Dog) == [sub, base]

    def test_named_blueprint_inherited(self):
        named = self.registry.register(Animal, Blueprint(legs=3), "tripod")
        assert self.registry.chain(Dog, "tripod") == [named]

    def test_missing_named_blueprint(self):
        self.registry.register(Animal, Blueprint())
        with pytest.raises(BlueprintNotFoundError, match="tripod"):
            self.registry.chain(Animal, "tripod")

    def test_no_blueprint(self):
        with pytest.raises(BlueprintNotFoundError):
            self.registry.chain(Animal)

    def test_redefinition_replaces(self):
        self.registry.register(Animal, Blueprint(legs=4))
        replacement = self.registry.register(Animal, Blueprint(legs=2))
        assert self.registry.chain(Animal) == [replacement]

    def test_clear_one_class(self):
        self.registry.register(Animal, Blueprint())
        self.registry.register(Dog, Blueprint())
        self.registry.clear(Dog)
        assert self.registry.lookup(Dog) is None
        assert self.registry.lookup(Animal) is not None

    def test_default_name_from_config(self):
        set_config(ForgeConfig(default_blueprint="base"))
        bp = self.registry.register(Animal, Blueprint())
        assert self.registry.lookup(Animal, "base") is bp
        assert self.registry.chain(Animal) == [bp]

    def test_define_blueprint_uses_default_registry(self):
        bp = define_blueprint(Animal, legs=4)
        assert default_registry.lookup(Animal) is bp
