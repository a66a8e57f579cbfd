"""
Help, usage and version rendering.

Every render method is pure: it reads the registry and the application
metadata and returns a list of text lines. Printing is left to the caller
(see Renderer.texts() for the rich form used by the dispatcher).

Layouts
- usage(script): global usage line, global options, the command list in
  registration order, a footer hint and the application epilog.
- command_usage(script, key): usage line of one command followed by its
  option schema ("  -f, --force<TAB>description").
- version(): "<name> version <version>, framework version <framework>".

The global options block gets an extra tab when any command has a subcommand,
so it lines up with the two-word entries of the command list. The console
expands tabs to 8-column stops.
"""
from collections import defaultdict

from rich.text import Text


class Renderer:
    """
    Render help screens from a Registry and an Application.
    """

    def __init__(self, registry, application):
        self.registry = registry
        self.application = application

    def usage(self, script):
        lines = [f"Usage: {script} [OPTIONS] COMMAND [SUBCOMMAND] [opt...]"]
        lines.extend(self.global_options())
        lines.extend(self.commands())
        lines.append("")
        lines.append(f"Run '{script} COMMAND [SUBCOMMAND] --help' for more information on a command.")
        if self.application.epilog:
            lines.append("")
            lines.append(self.application.epilog)
        return lines

    def global_options(self):
        tabs = "\t\t" if self.registry.has_any_subcommand() else "\t"
        return [
            "",
            "Options:",
            f"  -h, --help{tabs}Print usage",
            f"  -v, --version{tabs}Print version information",
        ]

    def commands(self):
        lines = ["", "Commands:"]
        for entry in self.registry:
            lines.append(f"  {entry.name}\t{entry.descr or ''}")
        return lines

    def command_usage(self, script, key):
        """
        usage of a single command; `key` is the joined command/subcommand.
        """
        lines = [f"Usage: {script} {key} [opt...]"]
        lines.extend(self.command_options(key))
        if self.application.epilog:
            lines.append(self.application.epilog)
        return lines

    def command_options(self, key):
        entry = self.registry.lookup(key)
        if entry is None or not entry.options:
            return []
        lines = ["", "Options:"]
        for option in entry.options:
            lines.append(f"  {', '.join(option.flags)}\t{option.descr or ''}")
        lines.append("")
        return lines

    def version(self):
        application = self.application
        return [
            f"{application.name} version {application.version}, "
            f"framework version {application.framework_version}"
        ]

    def texts(self, lines):
        """
        turn rendered lines into rich Text, styling headings when colorful.

        tabs are kept in the text and expanded to 8-column stops when printed,
        the way a terminal shows the raw lines.

        palette keys (override through __styles__ in __main__)
        - usage-label, section-label, epilog-section
        """
        styles = defaultdict(str, {
            "usage-label": "bold #00E6FF",  # cyan usage headline
            "section-label": "bold #FFFFFF",  # white section headers
            "epilog-section": "#737373",  # dim footer gray
        } | getattr(__import__("__main__"), "__styles__", {}))

        texts = []
        for line in lines:
            text = Text(line, no_wrap=True, tab_size=8)
            if self.application.colorful:
                if line.startswith("Usage:"):
                    text.stylize(styles["usage-label"], 0, len("Usage:"))
                elif line in ("Options:", "Commands:"):
                    text.stylize(styles["section-label"])
                elif line and line == self.application.epilog:
                    text.stylize(styles["epilog-section"])
            texts.append(text)
        return texts


__all__ = (
    "Renderer",
)
