"""Info.plist generation."""

from __future__ import annotations

import codecs
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Union
from xml.sax.saxutils import escape

from jinja2 import (
    BaseLoader,
    Environment,
    FileSystemLoader,
    PackageLoader,
    StrictUndefined,
    TemplateNotFound,
    TemplateSyntaxError,
)
from jinja2 import TemplateError as JinjaTemplateError

from ..errors import BundleIOError, ResourceNotFoundError, TemplateError
from ..schemas.config import BundleConfig
from .encoding import DEFAULT_ENCODING, detect_xml_encoding
from .utils import write_text

logger = logging.getLogger(__name__)

DEFAULT_ICON = "GenericJavaApp.icns"

ContextValue = Union[str, List[str], None]
ManifestContext = Dict[str, ContextValue]


def resolve_icon_name(icon_file: Optional[str], resource_root: Path) -> str:
    """Return the icon file name recorded in the manifest.

    Only the base name is kept. Unset or missing icons fall back to the
    generic application icon.
    """

    if not icon_file:
        return DEFAULT_ICON
    icon = resource_root / icon_file
    return icon.name if icon.is_file() else DEFAULT_ICON


def build_context(config: BundleConfig, classpath: Sequence[str], *, resource_root: Path) -> ManifestContext:
    """Collect the values merged into the manifest template.

    ``classpath`` holds the bundled entries in load order; the configured
    additional class path entries are appended after them.
    """

    return {
        "mainClass": config.main_class,
        "cfBundleExecutable": config.launcher_name,
        "vmOptions": config.vm_options,
        "bundleName": config.clean_bundle_name,
        "workingDirectory": config.working_directory,
        "iconFile": resolve_icon_name(config.icon_file, resource_root),
        "version": config.version,
        "jvmVersion": config.jvm_version,
        "classpath": [*classpath, *config.additional_classpath],
        "jvmArguments": list(config.jvm_arguments),
    }


def render_array(values: Iterable[str]) -> str:
    """Render ``values`` as a plist ``<array>`` of ``<string>`` elements."""

    items = "".join(f"<string>{escape(value)}</string>" for value in values)
    return f"<array>{items}</array>"


def template_values(context: Mapping[str, ContextValue]) -> Dict[str, str]:
    """Escape context values for direct substitution; unset values render empty."""

    values: Dict[str, str] = {}
    for key, value in context.items():
        if value is None:
            values[key] = ""
        elif isinstance(value, list):
            values[key] = render_array(value)
        else:
            values[key] = escape(str(value))
    return values


@dataclass(slots=True)
class RenderedDescriptor:
    template_id: str
    text: str
    encoding: str
    override: Optional[Path] = None


class DescriptorRenderer:
    """Renders manifest templates with a Jinja environment owned by the instance.

    A template found at ``<resource_root>/<template_id>`` overrides the one
    shipped with the package and is read in the encoding its bytes declare.
    """

    def __init__(
        self,
        resource_root: Path,
        *,
        package: str = "appbundler",
        package_path: str = "templates",
    ) -> None:
        self.resource_root = resource_root
        self.package = package
        self.package_path = package_path

    def render(self, template_id: str, context: Mapping[str, ContextValue]) -> RenderedDescriptor:
        override = self.resource_root / template_id
        if override.is_file():
            encoding = self._detect_encoding(override, template_id)
            _check_codec(encoding, template_id)
            logger.debug("Detected encoding %s for dictionary file %s", encoding, template_id)
            loader: BaseLoader = FileSystemLoader(str(self.resource_root), encoding=encoding)
        else:
            override = None
            encoding = DEFAULT_ENCODING
            loader = self._package_loader(template_id, encoding)

        environment = Environment(
            loader=loader,
            undefined=StrictUndefined,
            autoescape=False,
            keep_trailing_newline=True,
        )
        error_context = {"template": template_id, "encoding": encoding, "operation": "render"}
        try:
            template = environment.get_template(template_id)
            text = template.render(**template_values(context))
        except TemplateNotFound as exc:
            raise ResourceNotFoundError(
                f"Could not find resource for template {template_id}",
                context=error_context,
            ) from exc
        except TemplateSyntaxError as exc:
            raise TemplateError(
                f"Error parsing {template_id} at line {exc.lineno}: {exc.message}",
                context={**error_context, "line": exc.lineno},
            ) from exc
        except JinjaTemplateError as exc:
            raise TemplateError(
                f"Error merging Info.plist template {template_id}: {exc}",
                context=error_context,
            ) from exc
        except (UnicodeDecodeError, LookupError) as exc:
            raise TemplateError(
                f"Could not decode template {template_id} as {encoding}: {exc}",
                context=error_context,
            ) from exc
        return RenderedDescriptor(template_id=template_id, text=text, encoding=encoding, override=override)

    def _detect_encoding(self, path: Path, template_id: str) -> str:
        try:
            raw = path.read_bytes()
        except OSError as exc:
            raise BundleIOError(
                f"Could not read template {template_id} from {path}",
                context={"template": template_id, "path": path, "operation": "read"},
            ) from exc
        return detect_xml_encoding(raw)

    def _package_loader(self, template_id: str, encoding: str) -> BaseLoader:
        try:
            return PackageLoader(self.package, self.package_path, encoding=encoding)
        except (ValueError, ModuleNotFoundError) as exc:
            raise ResourceNotFoundError(
                f"Could not find resource for template {template_id}",
                context={"template": template_id, "package": self.package, "operation": "locate"},
            ) from exc


def _check_codec(encoding: str, template_id: str) -> None:
    try:
        codecs.lookup(encoding)
    except LookupError as exc:
        raise TemplateError(
            f"Template {template_id} declares unsupported encoding {encoding}",
            context={"template": template_id, "encoding": encoding, "operation": "detect_encoding"},
        ) from exc


def write_info_plist(
    info_plist: Path,
    config: BundleConfig,
    classpath: Sequence[str],
    *,
    renderer: DescriptorRenderer,
) -> RenderedDescriptor:
    """Render the manifest template and write ``Info.plist``.

    Characters the output encoding cannot represent are written as XML
    character references.
    """

    context = build_context(config, classpath, resource_root=renderer.resource_root)
    rendered = renderer.render(config.dictionary_file, context)
    write_text(info_plist, rendered.text, encoding=rendered.encoding, errors="xmlcharrefreplace")
    logger.info("Wrote %s from template %s", info_plist, rendered.template_id)
    return rendered
