"""Inspect tabbed blocks and switch tokenizer behavior via ParseConfig."""

from pestanas import ParseConfig, parse_config_context, parse_sections

source = """
===! "Install"
    pip install pestanas

    === "Linux"
        apt install python3

    === "macOS"
        brew install python

=== "Usage"
    python -m pestanas README.md
"""

for section in parse_sections(source):
    print(f"{section.title!r} flags={section.flags!r} at {section.start}")
    for child in section.children:
        print(f"  {child.title!r}: {child.body_text}")

# Headers indented a full tab stop are indented code unless that is disabled
indented = '    === "Nested in a list"\n        body\n'
print(parse_sections(indented))

with parse_config_context(ParseConfig(disabled_constructs=frozenset({"code_indented"}))):
    print(parse_sections(indented)[0].title)
