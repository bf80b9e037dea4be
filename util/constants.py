from typing import Final


class InternalURIs:
    API = "/api"
    FILES = API + "/files"
    FILES_ZIP = FILES + "/zip"
    FILE_CONTENT = FILES + "/content"
    CREATE_STARTER = API + "/create-starter"
    PREPARE_MIGRATION = API + "/prepare-migration"
    MIGRATE_USERNAME = API + "/migrate-username"
    VALIDATE_HTML = API + "/validate-html"
    VALIDATION_REPORT = API + "/validation-report"
    HEALTHZ = "/healthz"


USERNAME_PATTERN: Final[str] = r"^[a-zA-Z0-9_-]+$"

# Template placeholders substituted at serve/generation time.
HANKO_URL_PLACEHOLDER: Final[str] = "HANKO_API_URL_PLACEHOLDER"
USERNAME_PLACEHOLDER: Final[str] = "USERNAME_PLACEHOLDER"
YEAR_PLACEHOLDER: Final[str] = "CURRENT_YEAR_PLACEHOLDER"

ALLOWED_EXTENSIONS: Final[frozenset[str]] = frozenset(
    {
        # source
        ".html", ".htm",
        ".shtml", ".shtm",
        ".xhtml", ".xht",
        ".css", ".js", ".mjs",
        ".md", ".mdx", ".jsx", ".riot", ".tag",
        # fonts
        ".woff", ".woff2", ".ttf", ".otf",
        # images
        ".png", ".jpg", ".jpeg", ".gif",
        ".webp", ".svg", ".svgz", ".ico",
        ".avif", ".heic", ".heif",
        ".bmp", ".tiff", ".tif",
        # media
        ".mp4", ".webm", ".mp3", ".wav",
        ".mid", ".midi", ".ogg", ".ogv",
        ".mov", ".qt",
        # 3d
        ".glb", ".gltf",
        # data
        ".txt", ".json", ".xml", ".csv", ".tsv", ".yaml", ".yml",
        ".ini", ".conf", ".properties", ".env",
        # feeds
        ".rss", ".atom", ".rdf",
        # archives
        ".zip", ".tar", ".tgz", ".gz", ".bz2", ".xz", ".7z",
        # documents
        ".pdf",
        # manifests / maps
        ".webmanifest", ".map",
    }
)

# HTML void elements; never pushed on the tag stack by the linter.
VOID_ELEMENTS: Final[frozenset[str]] = frozenset(
    {
        "area", "base", "br", "col", "embed", "hr", "img",
        "input", "link", "meta", "param", "source", "track", "wbr",
    }
)
