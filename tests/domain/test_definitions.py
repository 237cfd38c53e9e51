"""Tests for FactoryDefinition trait resolution and inheritance merging."""

from __future__ import annotations

import pytest

from rowsmith.domain.definitions import FactoryDefinition
from rowsmith.domain.generators import constant
from rowsmith.domain.traits import Trait
from tests.fixtures.schema import authors


def _noop(*_args: object) -> None:
    return None


class TestTraitResolution:
    def test_base_defaults_without_traits(self) -> None:
        definition = FactoryDefinition(
            table=authors, default_values={"name": "Base", "country": "US"}
        )

        assert definition.resolve_defaults([]) == {"name": "Base", "country": "US"}

    def test_later_trait_wins_regardless_of_declaration_order(self) -> None:
        definition = FactoryDefinition(
            table=authors,
            default_values={"country": "US"},
            traits={
                "second": Trait("second", overrides={"country": "JP"}),
                "first": Trait("first", overrides={"country": "DE"}),
            },
        )

        assert definition.resolve_defaults(["first", "second"])["country"] == "JP"
        assert definition.resolve_defaults(["second", "first"])["country"] == "DE"

    def test_unknown_trait_is_ignored(self) -> None:
        definition = FactoryDefinition(
            table=authors,
            default_values={"name": "Base"},
            traits={"european": Trait("european", overrides={"country": "DE"})},
        )

        assert definition.resolve_defaults(["nope", "european"]) == {
            "name": "Base",
            "country": "DE",
        }
        assert definition.resolve_after_create_callbacks(["nope"]) == []

    def test_trait_generators_overlay_base_generators(self) -> None:
        base = constant("base")
        overlay = constant("trait")
        definition = FactoryDefinition(
            table=authors,
            generators={"name": base, "bio": base},
            traits={"loud": Trait("loud", generators={"name": overlay})},
        )

        assert definition.resolve_generators(["loud"]) == {"name": overlay, "bio": base}

    def test_trait_literal_replaces_base_generator(self) -> None:
        definition = FactoryDefinition(
            table=authors,
            generators={"name": constant("generated")},
            traits={"named": Trait("named", overrides={"name": "Fixed"})},
        )

        defaults, generators = definition.resolve_fields(["named"])

        assert defaults == {"name": "Fixed"}
        assert generators == {}

    def test_trait_generator_replaces_base_literal(self) -> None:
        generator = constant("generated")
        definition = FactoryDefinition(
            table=authors,
            default_values={"name": "Fixed"},
            traits={"random": Trait("random", generators={"name": generator})},
        )

        defaults, generators = definition.resolve_fields(["random"])

        assert defaults == {}
        assert generators == {"name": generator}

    def test_callbacks_are_appended_in_request_order(self) -> None:
        def base(record): ...

        def first(record): ...

        def second(record): ...

        definition = FactoryDefinition(
            table=authors,
            before_create_callbacks=(base,),
            traits={
                "a": Trait("a", before_create_callbacks=(first,)),
                "b": Trait("b", before_create_callbacks=(second,)),
            },
        )

        assert definition.resolve_before_create_callbacks(["b", "a"]) == [
            base,
            second,
            first,
        ]

    def test_transient_callbacks_resolve_separately(self) -> None:
        def plain(record): ...

        def aware(record, transients): ...

        definition = FactoryDefinition(
            table=authors,
            after_create_callbacks=(plain,),
            traits={"t": Trait("t", transient_after_create_callbacks=(aware,))},
        )

        assert definition.resolve_after_create_callbacks(["t"]) == [plain]
        assert definition.resolve_transient_after_create_callbacks(["t"]) == [aware]
        assert definition.resolve_transient_before_create_callbacks(["t"]) == []

    def test_resolution_does_not_mutate_definition(self) -> None:
        definition = FactoryDefinition(
            table=authors,
            default_values={"country": "US"},
            traits={"european": Trait("european", overrides={"country": "DE"})},
        )

        resolved = definition.resolve_defaults(["european"])
        resolved["name"] = "Changed"

        assert dict(definition.default_values) == {"country": "US"}


class TestImmutability:
    def test_collections_are_copied_and_read_only(self) -> None:
        defaults = {"name": "Base"}
        callbacks = [_noop]
        definition = FactoryDefinition(
            table=authors, default_values=defaults, after_create_callbacks=callbacks
        )
        defaults["name"] = "Changed"
        callbacks.append(_noop)

        assert definition.default_values["name"] == "Base"
        assert definition.after_create_callbacks == (_noop,)
        with pytest.raises(TypeError):
            definition.default_values["name"] = "x"  # type: ignore[index]

    def test_trait_collections_are_read_only(self) -> None:
        trait = Trait("t", overrides={"country": "DE"})

        with pytest.raises(TypeError):
            trait.overrides["country"] = "FR"  # type: ignore[index]

    def test_trait_lookup_helpers(self) -> None:
        definition = FactoryDefinition(
            table=authors, traits={"european": Trait("european")}
        )

        assert definition.has_trait("european")
        assert not definition.has_trait("asian")
        assert definition.trait_names() == frozenset({"european"})
        assert definition.is_root


class TestMergedOver:
    def test_child_defaults_win_and_parent_fill_gaps(self) -> None:
        parent = FactoryDefinition(
            table=authors, default_values={"name": "Base", "country": "US"}
        )
        child = FactoryDefinition(
            table=authors, parent_name="base", default_values={"name": "Child"}
        )

        merged = child.merged_over(parent)

        assert dict(merged.default_values) == {"name": "Child", "country": "US"}
        assert merged.parent_name is None

    def test_child_trait_replaces_parent_trait_entirely(self) -> None:
        parent = FactoryDefinition(
            table=authors,
            traits={
                "regional": Trait("regional", overrides={"country": "US", "bio": "x"}),
                "european": Trait("european", overrides={"country": "DE"}),
            },
        )
        child = FactoryDefinition(
            table=authors,
            parent_name="base",
            traits={"regional": Trait("regional", overrides={"country": "JP"})},
        )

        merged = child.merged_over(parent)

        assert merged.resolve_defaults(["regional"]) == {"country": "JP"}
        assert merged.resolve_defaults(["european"]) == {"country": "DE"}

    def test_callbacks_concatenate_parent_first(self) -> None:
        def parent_cb(record): ...

        def child_cb(record): ...

        def parent_aware(record, transients): ...

        parent = FactoryDefinition(
            table=authors,
            after_create_callbacks=(parent_cb,),
            transient_before_create_callbacks=(parent_aware,),
        )
        child = FactoryDefinition(
            table=authors, parent_name="base", after_create_callbacks=(child_cb,)
        )

        merged = child.merged_over(parent)

        assert merged.after_create_callbacks == (parent_cb, child_cb)
        assert merged.transient_before_create_callbacks == (parent_aware,)

    def test_child_generator_beats_parent_literal(self) -> None:
        generator = constant("generated")
        parent = FactoryDefinition(table=authors, default_values={"name": "Base"})
        child = FactoryDefinition(
            table=authors, parent_name="base", generators={"name": generator}
        )

        merged = child.merged_over(parent)

        assert "name" not in merged.default_values
        assert merged.generators["name"] is generator
