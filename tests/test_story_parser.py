"""Tests for the structured and free-form story parsers."""

from cartoon_creator.services.story_parser import (
    parse_simple_story,
    parse_story,
    parse_story_text,
)


class TestStructuredParser:
    def test_header_fields(self, structured_story):
        parsed = parse_story_text(structured_story)

        assert parsed.title == "Benny and the Rainbow Flowers"
        assert parsed.genre == "fantasy"
        assert parsed.age_group == "children"
        assert parsed.summary == (
            "Benny the bear and Rosie the rabbit search for magic flowers. "
            "They learn that kindness makes them bloom."
        )
        assert parsed.moral == "Kindness makes good things grow."
        assert parsed.ending == "The flowers bloomed and everyone celebrated."

    def test_character_bullets_split_on_first_hyphen(self, structured_story):
        parsed = parse_story_text(structured_story)

        assert [c.name for c in parsed.characters] == ["Benny", "Rosie"]
        assert parsed.characters[0].description == "a friendly brown bear who loves honey"
        assert parsed.characters[1].description == "a clever rabbit - always curious"

    def test_scenes(self, structured_story):
        parsed = parse_story_text(structured_story)

        assert len(parsed.scenes) == 2
        first, second = parsed.scenes
        assert first.scene_number == 1
        assert first.title == "The Plan"
        assert first.location == "The village square"
        assert first.characters == ["Benny", "Rosie"]
        assert first.action == (
            "Benny and Rosie meet by the fountain. They decide to find the rainbow flowers."
        )
        assert first.dialogue == "Benny says: 'Let's go on an adventure!'"
        assert second.characters == ["Rosie"]
        assert second.location == "Whispering Woods"

    def test_scene_count_matches_markers_without_blank_lines(self):
        text = "\n".join(
            [
                "SCENE 1: One",
                "LOCATION: Hill",
                "SCENE 2: Two",
                "ACTION: Something happens",
                "SCENE 3: Three",
            ]
        )
        parsed = parse_story_text(text)

        assert [s.scene_number for s in parsed.scenes] == [1, 2, 3]
        assert parsed.scenes[0].location == "Hill"
        assert parsed.scenes[1].action == "Something happens"

    def test_moral_closes_open_scene(self):
        text = "SCENE 1: Only\nLOCATION: Beach\nMORAL: Share your toys."
        parsed = parse_story_text(text)

        assert len(parsed.scenes) == 1
        assert parsed.moral == "Share your toys."

    def test_no_markers_yields_no_scenes(self):
        assert parse_story_text("Just a plain paragraph.").scenes == []


class TestSimpleParser:
    def test_scene_markers_split_content(self):
        text = "\n".join(
            [
                "Once upon a time",
                "there was a bear.",
                "He was brave.",
                "Scene 1: Meet",
                "The bear wakes up.",
                "Chapter 2: Trip",
                "They travel far.",
            ]
        )
        parsed = parse_simple_story(text)

        assert parsed.title == "Once upon a time"
        assert parsed.summary == "there was a bear. He was brave."
        assert len(parsed.scenes) == 3
        assert parsed.scenes[1].action == "The bear wakes up. ..."
        assert parsed.scenes[2].scene_number == 3

    def test_action_truncated_to_100_chars(self):
        long_line = "x" * 150
        parsed = parse_simple_story(f"Title\nSummary\n{long_line}")

        assert parsed.scenes[0].action == "x" * 100 + "..."

    def test_at_most_five_scenes(self):
        lines = ["Title", "Summary"]
        for n in range(1, 9):
            lines += [f"part {n}: heading", f"content {n}"]
        parsed = parse_simple_story("\n".join(lines))

        assert len(parsed.scenes) == 5

    def test_empty_text_gets_defaults(self):
        parsed = parse_simple_story("")

        assert parsed.title == "Untitled Story"
        assert parsed.summary == "A wonderful story"
        assert [s.title for s in parsed.scenes] == ["The Beginning", "The Challenge"]
        assert [c.name for c in parsed.characters] == ["Main Character", "Friend"]


def test_parse_story_prefers_structured(structured_story):
    parsed, used_fallback = parse_story(structured_story)

    assert not used_fallback
    assert len(parsed.scenes) == 2


def test_parse_story_falls_back():
    parsed, used_fallback = parse_story("A bear\nwent outside\nand played all day")

    assert used_fallback
    assert parsed.title == "A bear"
    assert len(parsed.scenes) == 1
