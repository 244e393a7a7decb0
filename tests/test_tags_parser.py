from api_doc_generator.parser.tags import parse_annotations


class TestParseAnnotations:
    def test_empty_input_gives_empty_block(self):
        for text in (None, "", "   \n  "):
            block = parse_annotations(text)
            assert block.tags == {}
            assert block.occurrences == []
            assert block.free_text == ""

    def test_splits_tags_from_free_text(self):
        block = parse_annotations("Title.\n\nLong text.\n@group Users\n@authenticated")
        assert block.tags == {"group": "Users", "authenticated": ""}
        assert block.free_text == "Title.\n\nLong text."

    def test_tag_names_are_case_insensitive(self):
        block = parse_annotations("@bodyParam id integer")
        assert block.has("bodyparam")
        assert block.has("BODYPARAM")
        assert block.get("bodyParam") == "id integer"

    def test_last_occurrence_wins(self):
        block = parse_annotations("@group A\n@group B")
        assert block.get("group") == "B"
        assert block.all("group") == ["A", "B"]

    def test_keeps_repeated_tags_in_order(self):
        block = parse_annotations("@bodyParam a string\n@group G\n@bodyParam b integer")
        assert block.all("bodyParam") == ["a string", "b integer"]
        assert block.occurrences == [("bodyparam", "a string"), ("group", "G"), ("bodyparam", "b integer")]

    def test_tags_do_not_continue_onto_next_line(self):
        block = parse_annotations("@response {\"id\": 1}\n  more text")
        assert block.get("response") == '{"id": 1}'
        assert block.free_text == "  more text"

    def test_indented_tags_are_recognized(self):
        block = parse_annotations("    @group Indented")
        assert block.get("group") == "Indented"

    def test_lone_at_sign_is_free_text(self):
        block = parse_annotations("Contact @ the office\n@ nope")
        assert block.tags == {}
        assert block.free_text == "Contact @ the office\n@ nope"

    def test_missing_tag_lookup(self):
        block = parse_annotations("Just text.")
        assert block.get("group") is None
        assert block.get("group", "fallback") == "fallback"
        assert block.all("bodyParam") == []
