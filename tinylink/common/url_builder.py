"""URL building utilities for TinyLink."""


def build_short_url(short_code: str, base_url: str) -> str:
    """Build the externally visible short link.
    
    Args:
        short_code: The short code
        base_url: Base URL (e.g., https://tiny.link)
        
    Returns:
        Complete short URL in the form ``{base_url}/{short_code}``
    """
    return f"{base_url.rstrip('/')}/{short_code}"
