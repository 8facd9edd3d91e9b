"""Tests for MemberBuilder and declaration normalization."""

from persistent_enum.enum.builder import MemberBuilder, normalize_required


class TestMemberBuilder:
    def test_fluent_chain_keeps_declaration_order(self) -> None:
        builder = MemberBuilder().add("One", count=1).add("Two", count=2).constant("Three")

        assert builder.build() == {
            "One": {"count": 1},
            "Two": {"count": 2},
            "Three": {},
        }
        assert len(builder) == 3

    def test_redeclaring_keeps_position_and_latest_attributes(self) -> None:
        builder = MemberBuilder().add("One", count=1).add("Two").add("One", count=9)

        assert list(builder.build()) == ["One", "Two"]
        assert builder.build()["One"] == {"count": 9}

    def test_build_returns_copies(self) -> None:
        builder = MemberBuilder().add("One", count=1)
        builder.build()["One"]["count"] = 99

        assert builder.build()["One"] == {"count": 1}

    def test_repr_lists_names(self) -> None:
        assert repr(MemberBuilder().add("One")) == "MemberBuilder(['One'])"


class TestNormalizeRequired:
    def test_sequence_of_names(self) -> None:
        assert normalize_required(["One", "Two"]) == {"One": {}, "Two": {}}

    def test_single_name(self) -> None:
        assert normalize_required("One") == {"One": {}}

    def test_mapping_with_none_attributes(self) -> None:
        assert normalize_required({"One": {"count": 1}, "Two": None}) == {
            "One": {"count": 1},
            "Two": {},
        }

    def test_none_is_empty(self) -> None:
        assert normalize_required(None) == {}

    def test_non_string_names_become_strings(self) -> None:
        assert normalize_required([1, 2]) == {"1": {}, "2": {}}

    def test_builder_members_are_appended(self) -> None:
        builder = MemberBuilder().add("Three", count=3)

        assert list(normalize_required(["One", "Two"], builder)) == ["One", "Two", "Three"]
