def apply_style(text: str, style: str):
    return f"[{style}]{text}[/{style}]"
