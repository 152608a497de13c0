"""
Tests for search queries — tokenizing and the /search option grammar
"""

import pytest

from hubline.core.query import (
    FileType, QueryError, SearchQuery, SizeBound, SizeDirection,
    parse_query, split_args, split_first_arg,
)
from hubline.core.units import MIB, base32_decode

TTH = "LWPNACQDBZRYXW3VHJVCJ64QBZNGHOHHHZWCLNQ"


class TestSplitArgs:

    def test_shell_quoting(self):
        assert split_args('"star wars" -t video') == ["star wars", "-t", "video"]

    def test_unbalanced_quote(self):
        with pytest.raises(QueryError, match="Error parsing arguments"):
            split_args('"open')


class TestSplitFirstArg:
    """One quoted argument, rest verbatim."""

    def test_plain(self):
        assert split_first_arg("music /srv/music") == ("music", "/srv/music")

    def test_quoted_first(self):
        assert split_first_arg('"Fun Stuff" ~/media/fun') == ("Fun Stuff", "~/media/fun")

    def test_escaped_space(self):
        assert split_first_arg("a\\ b c") == ("a b", "c")

    def test_rest_taken_literally(self):
        assert split_first_arg('x  /path with "quotes"') == ("x", '/path with "quotes"')

    def test_single_argument(self):
        assert split_first_arg("music") == ("music", None)

    def test_empty(self):
        assert split_first_arg("") == (None, None)

    def test_unterminated_quote(self):
        assert split_first_arg('"never closed') == (None, None)


class TestParseQuery:
    """The option grammar."""

    def test_terms_only(self):
        query = parse_query(["ubuntu", "iso"])
        assert query.terms == ("ubuntu", "iso")
        assert query.file_type is FileType.ANY
        assert query.size is None
        assert query.all_hubs is False

    def test_size_and_type(self):
        query = parse_query(["-ge", "700M", "-t", "video", "movie"])
        assert query.size == SizeBound(SizeDirection.AT_LEAST, 700 * MIB)
        assert query.file_type is FileType.VIDEO
        assert query.terms == ("movie",)

    def test_numeric_type(self):
        assert parse_query(["-t", "8", "music"]).file_type is FileType.DIRECTORY

    def test_later_options_overwrite(self):
        query = parse_query(["-le", "1M", "-ge", "2M", "-all", "-hub", "x"])
        assert query.size == SizeBound(SizeDirection.AT_LEAST, 2 * MIB)
        assert query.all_hubs is False

    def test_all(self):
        assert parse_query(["-all", "x"]).all_hubs is True

    def test_tth_alone(self):
        query = parse_query(["-tth", TTH])
        assert query.tth == base32_decode(TTH)
        assert query.file_type is FileType.TTH
        assert query.terms == ()

    def test_double_dash(self):
        query = parse_query(["--", "-all", "-t"])
        assert query.terms == ("-all", "-t")
        assert query.all_hubs is False

    @pytest.mark.parametrize("tokens,message", [
        (["-le"], "Option `-le' expects an argument."),
        (["-le", "big", "x"], "Invalid size argument for option `-le'."),
        (["-t", "movies", "x"], "Unknown argument for option `-t'."),
        (["-t", "9", "x"], "Unknown argument for option `-t'."),
        (["-tth", "ABC"], "Invalid TTH root for option `-tth'."),
        (["-tth", "\u0131" * 39], "Invalid TTH root for option `-tth'."),
        (["-x", "y"], "Unknown option: -x"),
        ([], "No search query given."),
        (["-all", "-t", "video"], "No search query given."),
    ])
    def test_errors(self, tokens, message):
        with pytest.raises(QueryError) as exc:
            parse_query(tokens)
        assert str(exc.value) == message

    def test_first_error_wins(self):
        with pytest.raises(QueryError, match="Unknown option: -x"):
            parse_query(["-x", "-le", "big"])


class TestSearchQuery:

    def test_needs_terms_or_tth(self):
        with pytest.raises(QueryError):
            SearchQuery()
