from .errors import UnknownPlatformError
from .platforms import get_descriptor
from .records import format_value

HEADING = "## My Profile Stats"


def render_markdown(platform_data):
    """
    platform id -> {feature: value}  ==>  Markdown snippet.

    Every platform must have a descriptor; that is checked up front so a bad
    key fails the whole render instead of producing half a snippet.
    """
    descriptors = {}
    for platform in platform_data:
        descriptor = get_descriptor(platform)
        if descriptor is None:
            raise UnknownPlatformError(platform)
        descriptors[platform] = descriptor

    lines = [HEADING, ""]
    for platform, data in platform_data.items():
        descriptor = descriptors[platform]
        lines.append(f"### {descriptor.name}")
        for feature, value in data.items():
            if value is None: continue
            lines.append(f"- {descriptor.label_for(feature)}: {format_value(value)}")
        lines.append("")

    return "\n".join(lines) + "\n"


def records_to_platform_map(records):
    """Collapse StatRecords into the renderer's input. Later duplicates win."""
    return {r.platform: dict(r.fields) for r in records}
