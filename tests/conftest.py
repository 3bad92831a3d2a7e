# File: tests/conftest.py
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Optional

import pytest
import yaml

from link_scout.crawler.crawler import ContentNodeCrawler
from link_scout.crawler.models import ContentNode
from link_scout.store.base import AssetResolver
from link_scout.store.memory import (
    InMemoryFindingRecorder,
    InMemoryTreeContext,
    InMemoryTreeStore,
    MappingAssetResolver,
)

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)
PROJECT_ROOT = Path(__file__).resolve().parent.parent


class ExplodingAssetResolver(AssetResolver):
    """Fails the test if the scanner ever asks for an asset."""

    def resolve(self, identifier: str) -> Optional[str]:
        raise AssertionError(f"unexpected asset lookup: {identifier}")


@pytest.fixture()
def now() -> datetime:
    return NOW


@pytest.fixture()
def tree() -> Dict[str, ContentNode]:
    """
    root
    └── sites
        └── example (document)
            ├── main (collection)
            │   └── text1 (content)
            ├── about (document)
            └── secret (document, hidden)
                └── below (document)
    orphan: lost (document)
    """
    root = ContentNode("root", "root")
    sites = root.add_child(ContentNode("sites", "unstructured", "sites"))
    site = sites.add_child(ContentNode("site", "document", "example", {"title": "Home"}))
    main = site.add_child(ContentNode("main", "collection", "main"))
    text1 = main.add_child(ContentNode("text1", "content", "text1"))
    about = site.add_child(ContentNode("about", "document", "about"))
    secret = site.add_child(ContentNode("secret", "document", "secret", hidden=True))
    below = secret.add_child(ContentNode("below", "document", "below"))
    lost = ContentNode("lost", "document", "lost")
    return {
        "root": root,
        "sites": sites,
        "site": site,
        "main": main,
        "text1": text1,
        "about": about,
        "secret": secret,
        "below": below,
        "lost": lost,
    }


@pytest.fixture()
def store(tree) -> InMemoryTreeStore:
    return InMemoryTreeStore({"live": tree["root"]}, orphans={"live": [tree["lost"]]})


@pytest.fixture()
def context(store) -> InMemoryTreeContext:
    return store.create_context("live", current_datetime=NOW, site_node_path="/sites/example")


@pytest.fixture()
def assets() -> MappingAssetResolver:
    return MappingAssetResolver({"logo": "/media/logo.png"})


@pytest.fixture()
def exploding_assets() -> ExplodingAssetResolver:
    return ExplodingAssetResolver()


@pytest.fixture()
def recorder() -> InMemoryFindingRecorder:
    return InMemoryFindingRecorder()


@pytest.fixture()
def crawler(store, assets, recorder) -> ContentNodeCrawler:
    return ContentNodeCrawler(store, assets, recorder)


@pytest.fixture()
def tree_file(tmp_path) -> Path:
    """Write a small tree file with one broken node link and one bad phone link."""
    data = {
        "workspaces": {
            "live": {
                "identifier": "root",
                "type": "root",
                "children": [
                    {
                        "identifier": "home",
                        "name": "home",
                        "type": "page",
                        "properties": {
                            "text": '<a href="node://missing">x</a>',
                            "footer": '<a href="tel:5551234">call</a>',
                        },
                    }
                ],
            }
        },
        "assets": {"logo": "/media/logo.png"},
    }
    path = tmp_path / "tree.yaml"
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return path


@pytest.fixture()
def config_file(tmp_path, tree_file) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(
        yaml.safe_dump(
            {
                "domain": "https://www.example.com/",
                "tree_file": tree_file.name,
                "node_types": {"page": ["document"]},
            }
        ),
        encoding="utf-8",
    )
    return path


@pytest.fixture()
def sample_config() -> Path:
    """The configuration shipped in configs/ together with its sample tree."""
    return PROJECT_ROOT / "configs" / "default.yaml"
