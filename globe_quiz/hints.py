def format_population(n):
    return f"{n:,}" if isinstance(n, int) else "unknown"


def get_region(feature):
    return feature.subregion or feature.continent


def get_hint(feature):
    parts = []
    region = get_region(feature)
    if region:
        parts.append(f"It is in {region}")
    parts.append(f"population {format_population(feature.pop_est)}")
    name = feature.name
    if name:
        parts.append(f"the name starts with \"{name[0].upper()}\"")
    text = ", ".join(parts)
    return text[0].upper() + text[1:] + "."
