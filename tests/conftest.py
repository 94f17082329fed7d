"""
Pytest Configuration for TEMPLATER Tests

Ensures proper import paths for the templater package during testing and
provides in-memory and on-disk template stores.
"""

import json
import logging
import sys
from pathlib import Path

import pytest

# Add the parent directory to sys.path to ensure proper imports
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from jinja2 import DictLoader  # noqa: E402

from templater.core.processor import TemplateProcessor  # noqa: E402
from templater.core.schemas import ProcessingOptions  # noqa: E402
from templater.store import TemplateStore  # noqa: E402


API_CONFIG = {
    "name": "API service",
    "filename": "api",
    "description": "Service functions for an entity",
    "version": "1.0.0",
    "outputExtension": "ts",
    "typesFileOutputExtension": "ts",
    "validatorSupport": ["zod"],
    "placeholders": {
        "entity": {"description": "camelCase name", "required": True},
        "imports": {"description": "Validator imports"},
    },
    "dependencies": {"nanoid": "^5.0.0"},
}

ZOD_VALIDATOR = {
    "name": "zod",
    "description": "Validation with zod",
    "author": "tests",
    "placeholders": {
        "imports": {"value": "import { z } from 'zod';", "required": True},
        "schema": {
            "value": [
                "const {{entity}}Schema = z.object({",
                "  id: z.string(),",
                "});",
            ],
            "required": True,
        },
        "typeExpr": {"value": "z.infer<typeof {{entity}}Schema>"},
        "validate": {"value": "{{entity}}Schema.parse(input);"},
    },
    "dependencies": {"zod": "^3.23.8"},
}

PLAIN_CONFIG = {
    "filename": "plain",
    "outputExtension": "ts",
}

SOURCES = {
    "api/api.config.json": json.dumps(API_CONFIG),
    "api/api.tpl": (
        "\n{{imports}}\n\n{{types}}\n\n"
        "export function create{{Entity}}(input) {\n"
        "  {{validate}}\n"
        "  return save('{{entities-}}', input);\n"
        "}\n"
    ),
    "api/api.types.tpl": "\n{{schema}}\nexport type {{Entity}} = {{typeExpr}};\n",
    "api/api.types.fallback.tpl": "\nexport type {{Entity}} = { id: string };\n",
    "api/validators/zod.config.json": json.dumps(ZOD_VALIDATOR),
    "plain/plain.config.json": json.dumps(PLAIN_CONFIG),
    "plain/plain.tpl": "export const {{entity}}Id = '{{Entity}}';",
}


@pytest.fixture
def sources():
    """Raw template store contents, keyed by path relative to the store root."""
    return dict(SOURCES)


@pytest.fixture
def store(sources):
    """Template store backed by an in-memory loader."""
    return TemplateStore(loader=DictLoader(sources))


@pytest.fixture
def templates_dir(tmp_path, sources):
    """The same templates written to a real directory."""
    root = tmp_path / "templates"
    for relative_path, content in sources.items():
        path = root / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def processor(store):
    """Processor with every test template and its validators registered."""
    processor = TemplateProcessor(store)
    for name in store.list_templates():
        processor.register_from_store(name)
    return processor


@pytest.fixture
def make_options():
    """Build ProcessingOptions with sensible defaults."""
    def _make(**overrides):
        values = {
            "entity": "blog post",
            "remove_comments": False,
            "validator_type": "none",
            "separate_types": False,
        }
        values.update(overrides)
        return ProcessingOptions(**values)
    return _make


@pytest.fixture(autouse=True)
def restore_templater_logger():
    """Undo handlers and levels installed by setup_logging during a test."""
    logger = logging.getLogger("templater")
    handlers, level = list(logger.handlers), logger.level
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
