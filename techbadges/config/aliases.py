"""Short name aliases for icons.

Maps common short names to their canonical icon base names so users can
write "js" instead of "javascript". Resolution is a single hop: targets
are never aliases themselves.
"""

ALIASES: dict[str, str] = {
    # Languages
    "js": "javascript",
    "ts": "typescript",
    "py": "python",
    "go": "golang",
    "sc": "scala",
    "vlang": "v",
    # Frameworks & Libraries
    "vue": "vuejs",
    "nuxt": "nuxtjs",
    "next": "nextjs",
    "nest": "nestjs",
    "express": "expressjs",
    "gatsbyjs": "gatsby",
    "rxjs": "reactivex",
    "rxjava": "reactivex",
    "rollup": "rollupjs",
    # Styling
    "tailwind": "tailwindcss",
    "scss": "sass",
    "windi": "windicss",
    "mui": "materialui",
    # Cloud & Infrastructure
    "cf": "cloudflare",
    "amazonwebservices": "aws",
    "googlecloud": "gcp",
    "k8s": "kubernetes",
    "apacheairflow": "airflow",
    # Databases
    "mongo": "mongodb",
    "postgres": "postgresql",
    # Tools & Platforms
    "net": "dotnet",
    "wasm": "webassembly",
    "md": "markdown",
    "gql": "graphql",
    "ghactions": "githubactions",
    "ktorio": "ktor",
    "pwsh": "powershell",
    "unreal": "unrealengine",
    "sklearn": "scikitlearn",
    # Adobe
    "ps": "photoshop",
    "ai": "illustrator",
    "pr": "premiere",
    "ae": "aftereffects",
    "au": "audition",
    # Social/Bots
    "bots": "discordbots",
}


def resolve_alias(name: str) -> str:
    """Get the canonical icon name from a short name or alias.

    Unknown names pass through lower-cased.
    """
    lowered = name.lower()
    return ALIASES.get(lowered, lowered)


def aliases_for(base_name: str) -> list[str]:
    """List the aliases that point at a base name, in table order."""
    return [alias for alias, target in ALIASES.items() if target == base_name]
