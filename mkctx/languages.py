# mkctx/languages.py

from pathlib import PurePosixPath

SPECIAL_NAMES = {
    "Dockerfile": "dockerfile",
    "Makefile": "make",
}

EXTENSION_LANGUAGES = {
    "go": "go",
    "md": "markdown", "markdown": "markdown",
    "txt": "text",
    "js": "javascript",
    "ts": "typescript",
    "json": "json",
    "yaml": "yaml", "yml": "yaml",
    "toml": "toml",
    "sh": "bash", "bash": "bash",
    "zsh": "zsh",
    "py": "python",
    "rb": "ruby",
    "php": "php",
    "java": "java",
    "kt": "kotlin",
    "rs": "rust",
    "c": "c", "h": "c",
    "cc": "cpp", "cpp": "cpp", "cxx": "cpp", "hpp": "cpp", "hh": "cpp",
    "cs": "csharp",
    "html": "html", "htm": "html",
    "css": "css",
    "scss": "scss",
    "sql": "sql",
    "xml": "xml",
    "ini": "ini", "conf": "ini",
}


def language_for(rel_path: str) -> str:
    """Fence info string for a file; empty when nothing sensible applies."""
    path = PurePosixPath(rel_path)
    if path.name in SPECIAL_NAMES:
        return SPECIAL_NAMES[path.name]
    _, dot, ext = path.name.rpartition(".")
    ext = ext.lower() if dot else ""
    if not ext:
        return ""
    return EXTENSION_LANGUAGES.get(ext, ext)
