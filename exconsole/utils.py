def apply_style(text: str, style: str):
    return f"[{style}]{text}[/{style}]"

def subtle(text):
    return apply_style(text, "detail")
