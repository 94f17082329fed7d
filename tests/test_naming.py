"""
Tests for entity name case derivation
"""

import pytest

from templater.core.naming import (
    NameForms,
    derive_name_forms,
    format_entity_name,
    pluralize,
    to_camel_case,
    to_snake_case,
)
from templater.core.placeholders import ENTITY_PLACEHOLDERS


class TestDeriveNameForms:
    """Test the ten case variants of an entity name."""

    def test_snake_case_input(self):
        """Test the documented blog_post example."""
        forms = derive_name_forms("blog_post")

        assert (forms.camel, forms.camel_plural) == ("blogPost", "blogPosts")
        assert (forms.pascal, forms.pascal_plural) == ("BlogPost", "BlogPosts")
        assert (forms.kebab, forms.kebab_plural) == ("blog-post", "blog-posts")
        assert (forms.snake, forms.snake_plural) == ("blog_post", "blog_posts")
        assert (forms.screaming_snake, forms.screaming_snake_plural) == ("BLOG_POST", "BLOG_POSTS")

    def test_spaces_are_separators(self):
        """Test that whitespace runs behave like underscores."""
        assert derive_name_forms("blog   post") == derive_name_forms("blog_post")

    def test_surrounding_whitespace_ignored(self):
        forms = derive_name_forms("  user profile  ")
        assert forms.camel == "userProfile"
        assert forms.pascal == "UserProfile"

    def test_input_is_lowercased(self):
        """Test that the input casing does not leak into the forms."""
        forms = derive_name_forms("User")
        assert forms.camel == "user"
        assert forms.pascal == "User"
        assert forms.screaming_snake == "USER"

    def test_single_word(self):
        forms = derive_name_forms("order")
        assert forms.camel == forms.snake == forms.kebab == "order"
        assert forms.camel_plural == "orders"
        assert forms.screaming_snake_plural == "ORDERS"

    @pytest.mark.parametrize("entity,expected", [
        ("category", ("categories", "Categories", "categories", "CATEGORIES", "categories")),
        ("company", ("companies", "Companies", "companies", "COMPANIES", "companies")),
        ("box", ("boxes", "Boxes", "boxes", "BOXES", "boxes")),
        ("person", ("people", "People", "people", "PEOPLE", "people")),
        ("user category", (
            "userCategories", "UserCategories", "user_categories", "USER_CATEGORIES", "user-categories",
        )),
        ("sales person", ("salesPeople", "SalesPeople", "sales_people", "SALES_PEOPLE", "sales-people")),
    ])
    def test_english_plural_rules(self, entity, expected):
        """Test that every plural form follows irregular and suffix-based rules."""
        forms = derive_name_forms(entity)
        assert (
            forms.camel_plural,
            forms.pascal_plural,
            forms.snake_plural,
            forms.screaming_snake_plural,
            forms.kebab_plural,
        ) == expected

    @pytest.mark.parametrize("entity", ["i", "a"])
    def test_single_letter_names_are_nouns(self, entity):
        """Test that one-letter names are not read as pronouns or articles."""
        forms = derive_name_forms(entity)
        assert forms.camel_plural == forms.snake_plural == forms.kebab_plural == f"{entity}s"
        assert forms.pascal_plural == f"{entity.upper()}s"

    def test_deterministic(self):
        assert derive_name_forms("line item") == derive_name_forms("line item")


class TestPlaceholderValues:
    """Test the mapping from placeholder names to values."""

    def test_covers_every_entity_placeholder(self):
        values = derive_name_forms("blog_post").placeholder_values()
        assert tuple(values) == ENTITY_PLACEHOLDERS

    def test_values(self):
        values = derive_name_forms("blog_post").placeholder_values()
        assert values["entity"] == "blogPost"
        assert values["Entities"] == "BlogPosts"
        assert values["entities_"] == "blog_posts"
        assert values["ENTITY_"] == "BLOG_POST"
        assert values["entities-"] == "blog-posts"

    def test_name_forms_is_frozen(self):
        forms = derive_name_forms("user")
        assert isinstance(forms, NameForms)
        with pytest.raises(Exception):
            forms.camel = "other"


class TestHelpers:
    """Test the individual case helpers."""

    def test_format_entity_name(self):
        """Test that formatting keeps casing and joins words with underscores."""
        assert format_entity_name("  User   Profile ") == "User_Profile"
        assert format_entity_name("order") == "order"

    def test_to_snake_case(self):
        assert to_snake_case(" Blog Post ") == "blog_post"

    def test_to_camel_case(self):
        assert to_camel_case("blog_post_comment") == "blogPostComment"

    def test_pluralize_keeps_screaming_case(self):
        assert pluralize("USER") == "USERS"

    def test_pluralize_keeps_pascal_case(self):
        assert pluralize("BlogPost") == "BlogPosts"

    @pytest.mark.parametrize("word,expected", [
        ("Category", "Categories"),
        ("CATEGORY", "CATEGORIES"),
        ("UserCategory", "UserCategories"),
        ("USER_CATEGORY", "USER_CATEGORIES"),
        ("Person", "People"),
        ("order-item", "order-items"),
    ])
    def test_pluralize_changes_only_last_word(self, word, expected):
        assert pluralize(word) == expected


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
