"""Sample upstream payloads and record builders shared by the test suite."""
from ghtrending.models import Owner, RepositoryRecord

LINUX_FEED_ITEM = {
    "repo": "/torvalds/linux",
    "desc": "Linux kernel",
    "stars": 180000,
    "forks": 50000,
    "change": 120,
    "lang": "C",
    "build_by": [{"by": "/torvalds", "avatar": "a.png"}],
}

TRENDING_FEED = [
    LINUX_FEED_ITEM,
    {
        "repo": "/astral-sh/uv",
        "desc": "An extremely fast Python package manager.",
        "stars": "45,210",
        "forks": "1,302",
        "change": "873",
        "lang": "Rust",
        "build_by": [
            {"by": "/charliermarsh", "avatar": "c.png"},
            {"by": "/zanieb", "avatar": "z.png"},
        ],
    },
    {
        "repo": "/someone/dotfiles",
        "desc": None,
        "stars": 310,
        "forks": 12,
        "change": 40,
        "lang": "",
        "build_by": [],
    },
]


def search_item(**overrides) -> dict:
    item = {
        "id": 41881900,
        "name": "vscode",
        "full_name": "microsoft/vscode",
        "html_url": "https://github.com/microsoft/vscode",
        "description": "Visual Studio Code",
        "owner": {"login": "microsoft", "avatar_url": "https://avatars.githubusercontent.com/u/6154722"},
        "stargazers_count": 1000,
        "forks_count": 250,
        "language": "TypeScript",
        "created_at": "2015-09-03T20:23:38Z",
        "updated_at": "2024-05-01T10:00:00Z",
    }
    item.update(overrides)
    return item


SEARCH_RESPONSE = {
    "total_count": 2,
    "incomplete_results": False,
    "items": [
        search_item(),
        search_item(
            id=10270250,
            name="react",
            full_name="facebook/react",
            html_url="https://github.com/facebook/react",
            owner={"login": "facebook", "avatar_url": "f.png"},
            stargazers_count=220000,
            forks_count=45000,
            language="JavaScript",
        ),
    ],
}


def make_record(
    full_name: str = "octocat/hello-world",
    *,
    id: int = 1,
    language: str | None = "Python",
    stars: int = 100,
    forks: int = 10,
    new_stars: int = 5,
    new_forks: int = 1,
    avatar_url: str = "",
    updated_at: str = "",
) -> RepositoryRecord:
    owner, name = full_name.split("/")
    return RepositoryRecord(
        id=id,
        name=name,
        full_name=full_name,
        html_url=f"https://github.com/{full_name}",
        owner=Owner(login=owner, avatar_url=avatar_url),
        stargazers_count=stars,
        forks_count=forks,
        new_stars=new_stars,
        new_forks=new_forks,
        total_stars=stars,
        total_forks=forks,
        language=language,
        updated_at=updated_at,
    )
