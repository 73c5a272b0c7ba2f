"""Tests for parent maps and prefix derivation."""
import pytest
from dataclasses import dataclass
from typing import Optional

from resourcegraph import (
    ParentMap,
    ResourcePaths,
    ancestor_chain,
    build_parent_map,
    derive_prefixes,
    dom_id,
    field_name_path,
    localization_key,
    object_key,
)


@dataclass(eq=False)
class Postbox:
    number: str = ""


@dataclass(eq=False)
class Office:
    box: Optional[Postbox] = None


@dataclass(eq=False)
class Company:
    head_office: Optional[Office] = None
    branch: Optional[Office] = None


class TestBuildParentMap:
    """Tests for build_parent_map."""

    def test_records_every_child(self, person, address, country):
        parent_map = build_parent_map(person)

        assert len(parent_map) == 2
        assert parent_map.parent_of(address) is person
        assert parent_map.parent_of(country) is address

    def test_root_has_no_parent(self, person):
        parent_map = build_parent_map(person)

        assert person not in parent_map
        assert parent_map.parent_of(person) is None

    def test_items_in_discovery_order(self, person, address, country):
        pairs = list(build_parent_map(person).items())
        assert [(id(c), id(p)) for c, p in pairs] == [(id(address), id(person)), (id(country), id(address))]

    def test_none_root(self):
        assert len(build_parent_map(None)) == 0

    def test_shared_reference_first_parent_wins(self):
        """A child reachable from two parents keeps the first one discovered."""
        box = Postbox("12")
        head_office, branch = Office(box=box), Office(box=box)
        company = Company(head_office=head_office, branch=branch)

        parent_map = build_parent_map(company)

        assert parent_map.parent_of(box) is head_office
        assert parent_map.parent_of(branch) is company


class TestParentMap:
    """Tests for the ParentMap container."""

    def test_record_keeps_first_parent(self):
        child, first, second = Postbox(), Office(), Office()
        parent_map = ParentMap()

        assert parent_map.record(child, first)
        assert not parent_map.record(child, second)
        assert parent_map.parent_of(child) is first

    def test_unknown_object(self):
        assert ParentMap().parent_of(Postbox()) is None


class TestAncestorChain:
    """Tests for ancestor_chain."""

    def test_root_to_target(self, person, address, country):
        chain = ancestor_chain(country, build_parent_map(person))
        assert [id(link) for link in chain] == [id(person), id(address), id(country)]

    def test_orphan(self):
        orphan = Postbox()
        assert ancestor_chain(orphan, ParentMap()) == [orphan]

    def test_stops_on_cycle(self):
        """A corrupt map with a parent cycle still terminates."""
        a, b = Office(), Office()
        parent_map = ParentMap()
        parent_map.record(a, b)
        parent_map.record(b, a)

        chain = ancestor_chain(a, parent_map)
        assert [id(link) for link in chain] == [id(b), id(a)]


class TestDerivePrefixes:
    """Tests for derive_prefixes."""

    def test_root(self, person):
        assert derive_prefixes(person, build_parent_map(person)) == ["person"]

    def test_nested(self, person, address, country):
        parent_map = build_parent_map(person)

        assert derive_prefixes(address, parent_map) == ["person", "address_attributes"]
        assert derive_prefixes(country, parent_map) == ["person", "address_attributes", "country_attributes"]

    def test_orphan_is_its_own_root(self, address):
        assert derive_prefixes(address, ParentMap()) == ["address"]

    def test_shared_reference_uses_first_path(self):
        box = Postbox()
        company = Company(head_office=Office(box=box), branch=Office(box=box))

        prefixes = derive_prefixes(box, build_parent_map(company))
        assert prefixes == ["company", "office_attributes", "postbox_attributes"]


class TestPathStrings:
    """Tests for the id, name and key builders."""

    PREFIXES = ["person", "address_attributes", "country_attributes"]

    def test_dom_id(self):
        assert dom_id(self.PREFIXES, "name") == "person_address_attributes_country_attributes_name"
        assert dom_id(["person"], "name") == "person_name"

    def test_field_name_path(self):
        assert field_name_path(self.PREFIXES, "name") == "person[address_attributes][country_attributes][name]"
        assert field_name_path(["person"], "name") == "person[name]"

    def test_localization_key(self):
        assert localization_key(self.PREFIXES, "name") == "person[address_attributes][country_attributes].name"
        assert localization_key(["person"], "name") == "person.name"

    def test_object_key(self):
        assert object_key(["person", "address_attributes"]) == "person[address_attributes]"
        assert object_key([]) == ""

    @pytest.mark.parametrize("builder", [dom_id, field_name_path, localization_key])
    def test_empty_prefixes(self, builder):
        assert builder([], "name") == "name"


class TestResourcePaths:
    """Tests for the ResourcePaths facade."""

    def test_queries(self, person, address):
        paths = ResourcePaths.for_root(person)

        assert paths.prefixes(address) == ["person", "address_attributes"]
        assert paths.dom_id(address, "postcode") == "person_address_attributes_postcode"
        assert paths.field_name(address, "postcode") == "person[address_attributes][postcode]"
        assert paths.localization_key(address, "postcode") == "person[address_attributes].postcode"

    def test_object_outside_tree(self, person):
        """Objects not reachable from the root resolve as orphans."""
        stranger = Postbox()
        assert ResourcePaths.for_root(person).dom_id(stranger, "number") == "postbox_number"


class TestSiblingIds:
    """Ids follow prefix chains, which are derived from types, not attribute names."""

    def test_same_type_siblings_share_prefixes(self):
        head_office, branch = Office(box=Postbox()), Office(box=Postbox())
        paths = ResourcePaths.for_root(Company(head_office=head_office, branch=branch))

        assert paths.prefixes(head_office) == paths.prefixes(branch)
        assert paths.dom_id(head_office.box, "number") == paths.dom_id(branch.box, "number")

    def test_different_chains_give_different_ids(self):
        box = Postbox()
        company = Company(head_office=Office(box=box))
        paths = ResourcePaths.for_root(company)

        assert paths.prefixes(box) != paths.prefixes(company.head_office)
        assert paths.dom_id(box, "number") != paths.dom_id(company.head_office, "number")
