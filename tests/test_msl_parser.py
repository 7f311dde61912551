"""
Tests for the MSL parser.

Tests:
1. Top-level commands and their fields
2. Nested click bodies
3. Value expressions and lenient numerals
4. Media sections
5. All-or-nothing failures
"""

import pytest

from msl_core.errors import ParseError
from msl_core.examples import EXAMPLE_SCRIPTS
from msl_core.parser import MSLParser, parse_script
from msl_core.types import (
    Attribute,
    Click,
    Extensions,
    Media,
    MediaBlock,
    MediaType,
    Open,
    Save,
    Script,
    Set,
    Split,
    Text,
    Wait,
    Where,
)


class TestTopLevelCommands:

    def test_open_then_wait(self):
        script = parse_script('open "http://example.com"\nwait 0\n')
        assert script == Script(commands=[Open(url="http://example.com"), Wait(seconds=0)])

    def test_command_count_matches_keywords(self):
        text = """
open "https://example.com"
set title = text
media
save to "./out"
wait 3
open "https://example.org"
"""
        script = parse_script(text)
        assert len(script.commands) == 6
        assert [type(c) for c in script.commands] == [Open, Set, Media, Save, Wait, Open]

    def test_save_command(self):
        script = parse_script('save to "./pages/home"')
        assert script.commands == [Save(path="./pages/home")]

    def test_empty_script(self):
        assert parse_script("").commands == []
        assert parse_script("\n\n   \n").commands == []

    def test_comments_and_blank_lines_are_ignored(self):
        text = """
# fetch the landing page
open "https://example.com/#top"

   # indented comment
wait 2
"""
        script = parse_script(text)
        assert script.commands == [Open(url="https://example.com/#top"), Wait(seconds=2)]

    def test_indented_source_is_dedented(self):
        text = """
            open "https://example.com"
            click "a.next"
              wait 1
        """
        script = parse_script(text)
        assert script.commands == [
            Open(url="https://example.com"),
            Click(selector="a.next", body=[Wait(seconds=1)]),
        ]

    def test_parse_file(self, tmp_path):
        path = tmp_path / "job.msl"
        path.write_text('open "https://example.com"\n', encoding="utf-8")
        assert MSLParser().parse_file(str(path)).commands == [Open(url="https://example.com")]

    def test_parser_is_reusable(self):
        parser = MSLParser()
        assert len(parser.parse("wait 1\nwait 2")) == 2
        assert len(parser.parse("wait 3")) == 1


class TestNesting:

    def test_click_body(self):
        text = """
open "https://example.com"
click ".user-card a"
  set user = text
  wait 1
save to "./done"
"""
        script = parse_script(text)
        assert script.commands[1] == Click(
            selector=".user-card a",
            body=[Set(name="user", value=Text()), Wait(seconds=1)],
        )
        assert script.commands[2] == Save(path="./done")

    def test_three_levels(self):
        text = """
open "http://a.test/"
click "a.l1"
  click "a.l2"
    click "a.l3"
      set deep = text
    wait 2
  wait 1
wait 0
"""
        script = parse_script(text)
        assert script.depth() == 3
        level1 = script.commands[1]
        level2 = level1.body[0]
        level3 = level2.body[0]
        assert level3 == Click(selector="a.l3", body=[Set(name="deep", value=Text())])
        assert level2.body[1] == Wait(seconds=2)
        assert level1.body[1] == Wait(seconds=1)
        assert script.commands[2] == Wait(seconds=0)

    def test_click_without_body(self):
        script = parse_script('click "a"\nwait 1')
        assert script.commands == [Click(selector="a", body=[]), Wait(seconds=1)]

    def test_indentation_must_be_two_per_level(self):
        with pytest.raises(ParseError) as exc_info:
            parse_script('click "a"\n   wait 1')
        assert exc_info.value.line == 2
        assert "wait 1" in exc_info.value.remaining

    def test_indented_line_under_non_click_fails(self):
        with pytest.raises(ParseError):
            parse_script('open "https://example.com"\n  wait 1')


class TestValueExpressions:

    def test_attr(self):
        script = parse_script('set link = attr("href")')
        assert script.commands == [Set(name="link", value=Attribute(name="href"))]

    def test_set_without_spaces(self):
        script = parse_script('set x=text')
        assert script.commands == [Set(name="x", value=Text())]

    def test_chained_split(self):
        script = parse_script('set first = split(" - ").split(",")[0]')
        assert script.commands[0].value == Split(delimiter=",", index=0, source_delimiter=" - ")

    def test_single_split(self):
        script = parse_script('set last = split("/")[-1]')
        assert script.commands[0].value == Split(delimiter="/", index=-1)

    def test_invalid_split_index_defaults_to_minus_one(self):
        script = parse_script('set x = split("a").split("b")[abc]')
        assert script.commands[0].value.index == -1

    def test_unknown_value_expression(self):
        with pytest.raises(ParseError) as exc_info:
            parse_script('set x = html')
        assert "html" in exc_info.value.message


class TestWait:

    def test_invalid_numeral_defaults_to_one(self):
        assert parse_script("wait abc").commands == [Wait(seconds=1)]

    def test_negative_numeral_defaults_to_one(self):
        assert parse_script("wait -5").commands == [Wait(seconds=1)]

    def test_bare_wait_defaults_to_one(self):
        assert parse_script("wait").commands == [Wait(seconds=1)]

    def test_extra_words_fail(self):
        with pytest.raises(ParseError):
            parse_script("wait 5 seconds")


class TestMedia:

    def test_example_gallery(self):
        script = parse_script(EXAMPLE_SCRIPTS["user_gallery"])
        click = script.commands[1]
        assert click.body == [
            Set(name="user", value=Text()),
            Media(blocks=[
                MediaBlock(
                    kind=MediaType.IMAGE,
                    filters=[
                        Where(field="src", operator="~", value="cdn.example.com"),
                        Extensions(extensions=["jpg", "png"]),
                    ],
                    save_path="./media/{user}",
                ),
            ]),
        ]

    def test_multiple_blocks_and_operators(self):
        text = """
media
  image
    where src != "http://x/skip.jpg"
  video
  audio
    where title = "intro"
    extensions mp3,ogg, mp3
"""
        media = parse_script(text).commands[0]
        assert [b.kind for b in media.blocks] == [MediaType.IMAGE, MediaType.VIDEO, MediaType.AUDIO]
        assert media.blocks[0].filters == [Where(field="src", operator="!=", value="http://x/skip.jpg")]
        assert media.blocks[1].filters == []
        assert media.blocks[2].filters == [
            Where(field="title", operator="=", value="intro"),
            Extensions(extensions=["mp3", "ogg"]),
        ]

    def test_save_at_media_indent_is_a_command(self):
        text = """
media
  image
save to "./out"
"""
        script = parse_script(text)
        assert script.commands[0].blocks[0].save_path is None
        assert script.commands[1] == Save(path="./out")

    def test_filter_before_media_type_fails(self):
        with pytest.raises(ParseError) as exc_info:
            parse_script('media\n  where src ~ "x"')
        assert "media type" in exc_info.value.message

    def test_malformed_where_fails(self):
        with pytest.raises(ParseError):
            parse_script('media\n  image\n    where src like "x"')

    def test_empty_media(self):
        assert parse_script("media").commands == [Media(blocks=[])]


class TestFailures:

    def test_trailing_garbage_carries_remainder(self):
        text = 'open "http://example.com"\nwait 1\nstray token'
        with pytest.raises(ParseError) as exc_info:
            parse_script(text)
        err = exc_info.value
        assert err.remaining == "stray token"
        assert err.line == 3
        assert "stray" in str(err)

    def test_keyword_commits(self):
        # 'open' matched, so no other alternative is tried
        with pytest.raises(ParseError) as exc_info:
            parse_script('open https://example.com')
        assert exc_info.value.message.startswith("Expected: open")

    def test_unknown_keyword(self):
        with pytest.raises(ParseError) as exc_info:
            parse_script('opener "x"')
        assert "opener" in exc_info.value.message

    def test_unterminated_quote(self):
        with pytest.raises(ParseError):
            parse_script('click "a.next')

    def test_no_escaped_quotes(self):
        with pytest.raises(ParseError):
            parse_script(r'open "http://x/\"quoted\""')

    def test_remainder_includes_following_lines(self):
        with pytest.raises(ParseError) as exc_info:
            parse_script('wait 1\nbogus\nwait 2')
        assert exc_info.value.remaining == "bogus\nwait 2"


@pytest.mark.parametrize("name", sorted(EXAMPLE_SCRIPTS))
def test_examples_parse(name):
    script = parse_script(EXAMPLE_SCRIPTS[name])
    assert len(script.commands) > 0


def test_to_dict_is_tagged():
    script = parse_script(EXAMPLE_SCRIPTS["user_gallery"])
    data = script.to_dict()
    assert data["type"] == "script"
    click = data["commands"][1]
    assert click["type"] == "click"
    media = click["body"][1]
    assert media["blocks"][0]["kind"] == "image"
    assert media["blocks"][0]["filters"][1] == {"type": "extensions", "extensions": ["jpg", "png"]}
