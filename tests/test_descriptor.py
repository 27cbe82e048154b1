"""Tests for command descriptors."""

import pytest

from astrical.cli.descriptor import (
    ArgumentSpec,
    CommandDescriptor,
    OptionSpec,
    argument,
    option,
)
from astrical.exceptions import DescriptorError


class TestArgumentSpec:
    """Tests for positional argument specs."""

    def test_declare_plain(self):
        spec = argument("url", required=True, description="Git URL")
        assert spec == ArgumentSpec(name="url", required=True, variadic=False, description="Git URL")

    def test_declare_variadic_strips_suffix(self):
        """A trailing '...' marks the argument variadic."""
        spec = argument("files...")
        assert spec.name == "files"
        assert spec.variadic is True
        assert spec.required is False

    @pytest.mark.parametrize(
        "name,required,expected",
        [
            ("url", True, "<url>"),
            ("name", False, "[name]"),
            ("files...", True, "<...files>"),
            ("command...", False, "[...command]"),
        ],
    )
    def test_usage_token(self, name, required, expected):
        assert argument(name, required=required).usage == expected

    def test_description_defaults_to_empty(self):
        assert argument("name").description == ""


class TestOptionSpec:
    """Tests for option flag parsing."""

    def test_switch(self):
        opt = option("--force", "Skip confirmation", default=False)
        assert opt.option_strings == ("--force",)
        assert opt.name == "force"
        assert opt.takes_value is False
        assert opt.metavar is None

    def test_value_option(self):
        opt = option("--repo <url>", "Repository")
        assert opt.option_strings == ("--repo",)
        assert opt.takes_value is True
        assert opt.metavar == "url"

    def test_optional_value_placeholder(self):
        assert option("--out [dir]").metavar == "dir"

    def test_short_and_long(self):
        opt = option("-f, --force")
        assert opt.option_strings == ("-f", "--force")
        assert opt.long_flag == "--force"
        assert opt.name == "force"

    def test_short_only(self):
        assert option("-q").name == "q"

    def test_dashes_become_underscores(self):
        assert option("--dry-run").name == "dry_run"

    def test_default(self):
        assert option("--branch <name>", default="main").default == "main"
        assert OptionSpec("--x").default is None


class TestCommandDescriptor:
    """Tests for descriptor usage and validation."""

    def test_defaults(self):
        descriptor = CommandDescriptor()
        assert descriptor.description == ""
        assert descriptor.args == ()
        assert descriptor.options == ()
        assert descriptor.requires_project is False

    def test_lists_become_tuples(self):
        descriptor = CommandDescriptor(args=[argument("a")], options=[option("--b")])
        assert isinstance(descriptor.args, tuple)
        assert isinstance(descriptor.options, tuple)

    def test_is_frozen(self):
        descriptor = CommandDescriptor()
        with pytest.raises(AttributeError):
            descriptor.description = "changed"

    def test_usage(self):
        descriptor = CommandDescriptor(
            args=[argument("url", required=True), argument("name")],
        )
        assert descriptor.usage(("module", "add")) == "module add <url> [name]"

    def test_usage_variadic(self):
        descriptor = CommandDescriptor(args=[argument("files...", required=True)])
        assert descriptor.usage(("copy",)) == "copy <...files>"

    def test_usage_without_args(self):
        assert CommandDescriptor().usage(("module", "list")) == "module list"

    def test_validate_accepts_well_formed(self):
        descriptor = CommandDescriptor(
            args=[argument("src", required=True), argument("rest...")],
            options=[option("-f, --force"), option("--branch <name>", default="main")],
        )
        descriptor.validate(("copy",))

    def test_variadic_must_be_last(self):
        descriptor = CommandDescriptor(args=[argument("files..."), argument("dest")])
        with pytest.raises(DescriptorError) as exc_info:
            descriptor.validate(("copy",))
        assert "must be the last argument" in exc_info.value.errors[0]
        assert exc_info.value.context == {"command": "copy"}

    @pytest.mark.parametrize(
        "args",
        [
            [argument("first"), argument("rest...", required=True)],
            [argument("first"), argument("second", required=True)],
        ],
    )
    def test_required_after_optional(self, args):
        """A value could never reach the required slot without filling the optional one."""
        descriptor = CommandDescriptor(args=args)
        with pytest.raises(DescriptorError) as exc_info:
            descriptor.validate(("pick",))
        assert "follows optional argument 'first'" in exc_info.value.errors[0]

    def test_optional_after_required(self):
        CommandDescriptor(
            args=[argument("url", required=True), argument("name"), argument("rest...")]
        ).validate(("module", "add"))

    def test_single_variadic(self):
        descriptor = CommandDescriptor(args=[argument("a..."), argument("b...")])
        with pytest.raises(DescriptorError) as exc_info:
            descriptor.validate(("x",))
        assert any("At most one variadic" in e for e in exc_info.value.errors)

    @pytest.mark.parametrize("flags", ["--debug", "--root-dir <dir>", "-h", "--help"])
    def test_global_flag_clash(self, flags):
        descriptor = CommandDescriptor(options=[option(flags)])
        with pytest.raises(DescriptorError, match="clashes with global flag"):
            descriptor.validate(("x",))

    def test_duplicate_option_name(self):
        descriptor = CommandDescriptor(options=[option("--force"), option("-f, --force")])
        with pytest.raises(DescriptorError, match="declared twice"):
            descriptor.validate(("x",))

    def test_option_without_flag(self):
        descriptor = CommandDescriptor(options=[option("force")])
        with pytest.raises(DescriptorError, match="declares no flag"):
            descriptor.validate(("x",))

    def test_collects_all_errors(self):
        descriptor = CommandDescriptor(
            args=[argument("a..."), argument("b")],
            options=[option("--debug"), option("nope")],
        )
        with pytest.raises(DescriptorError) as exc_info:
            descriptor.validate(("x",))
        assert len(exc_info.value.errors) == 3
        assert "3 error(s)" in str(exc_info.value)
