from __future__ import annotations

import plistlib
from pathlib import Path

import pytest

from appbundler.bundle.descriptor import (
    DEFAULT_ICON,
    DescriptorRenderer,
    build_context,
    render_array,
    resolve_icon_name,
    write_info_plist,
)
from appbundler.errors import ErrorKind, ResourceNotFoundError, TemplateError
from appbundler.schemas.config import BundleConfig

from bundle_support import write_file

LATIN1_TEMPLATE = """<?xml version="1.0" encoding="ISO-8859-1"?>
<plist version="1.0"><dict>
<key>CFBundleName</key><string>{{ bundleName }}</string>
<key>Marker</key><string>été</string>
<key>ClassPath</key>{{ classpath }}
</dict></plist>
"""


def _config(**overrides: object) -> BundleConfig:
    payload: dict[str, object] = {"main_class": "com.example.Main", "bundle_name": "Example"}
    payload.update(overrides)
    return BundleConfig.model_validate(payload)


def test_classpath_order(tmp_path: Path) -> None:
    config = _config(additional_classpath=["/opt/ext.jar"])

    context = build_context(config, ["P", "A", "B", "lib/C"], resource_root=tmp_path)

    assert context["classpath"] == ["P", "A", "B", "lib/C", "/opt/ext.jar"]


def test_context_fields(tmp_path: Path) -> None:
    config = _config(bundle_name="My:App", vm_options="-Xmx1g", launcher_name="Launcher")

    context = build_context(config, [], resource_root=tmp_path)

    assert context["bundleName"] == "My-App"
    assert context["vmOptions"] == "-Xmx1g"
    assert context["cfBundleExecutable"] == "Launcher"
    assert context["workingDirectory"] == "$APP_ROOT"
    assert context["jvmVersion"] == "1.4+"
    assert context["jvmArguments"] == []


def test_render_array_escapes_entries() -> None:
    assert render_array([]) == "<array></array>"
    assert render_array(["a&b", "c"]) == "<array><string>a&amp;b</string><string>c</string></array>"


def test_icon_defaults_when_unset(tmp_path: Path) -> None:
    assert resolve_icon_name(None, tmp_path) == DEFAULT_ICON


def test_icon_defaults_when_missing(tmp_path: Path) -> None:
    assert resolve_icon_name("icons/app.icns", tmp_path) == DEFAULT_ICON


def test_icon_uses_base_name(tmp_path: Path) -> None:
    write_file(tmp_path / "icons" / "app.icns", b"icns")
    assert resolve_icon_name("icons/app.icns", tmp_path) == "app.icns"


def test_default_template_produces_valid_plist(tmp_path: Path) -> None:
    config = _config(
        bundle_name="My:App",
        version="2.0",
        jvm_arguments=["--fast", "a<b"],
        additional_classpath=["/opt/ext.jar"],
    )
    info_plist = tmp_path / "Info.plist"

    rendered = write_info_plist(
        info_plist,
        config,
        ["com/example/app/1.0/app-1.0.jar"],
        renderer=DescriptorRenderer(tmp_path / "classes"),
    )

    assert rendered.encoding == "UTF-8"
    assert rendered.override is None
    with info_plist.open("rb") as handle:
        payload = plistlib.load(handle)
    assert payload["CFBundleName"] == "My-App"
    assert payload["CFBundleExecutable"] == "JavaAppLauncher"
    assert payload["CFBundleIconFile"] == DEFAULT_ICON
    assert payload["CFBundleVersion"] == "2.0"
    java = payload["Java"]
    assert java["MainClass"] == "com.example.Main"
    assert java["ClassPath"] == ["com/example/app/1.0/app-1.0.jar", "/opt/ext.jar"]
    assert java["Arguments"] == ["--fast", "a<b"]
    assert java["WorkingDirectory"] == "$APP_ROOT"
    assert "VMOptions" not in java


def test_default_template_includes_vm_options(tmp_path: Path) -> None:
    info_plist = tmp_path / "Info.plist"
    write_info_plist(info_plist, _config(vm_options="-Xmx512m"), [], renderer=DescriptorRenderer(tmp_path))

    with info_plist.open("rb") as handle:
        payload = plistlib.load(handle)
    assert payload["Java"]["VMOptions"] == "-Xmx512m"
    assert payload["Java"]["ClassPath"] == []


def test_override_template_uses_declared_encoding(tmp_path: Path) -> None:
    resource_root = tmp_path / "classes"
    write_file(resource_root / "custom.plist", LATIN1_TEMPLATE.encode("iso-8859-1"))
    info_plist = tmp_path / "Info.plist"

    rendered = write_info_plist(
        info_plist,
        _config(bundle_name="Café", dictionary_file="custom.plist"),
        ["a.jar"],
        renderer=DescriptorRenderer(resource_root),
    )

    assert rendered.encoding == "ISO-8859-1"
    assert rendered.override == resource_root / "custom.plist"
    text = info_plist.read_bytes().decode("iso-8859-1")
    assert "<string>Café</string>" in text
    assert "été" in text
    assert "<array><string>a.jar</string></array>" in text


def test_malformed_template_raises_template_error(tmp_path: Path) -> None:
    write_file(tmp_path / "broken.plist", "<plist>{% if bundleName %}</plist>")

    with pytest.raises(TemplateError) as excinfo:
        DescriptorRenderer(tmp_path).render("broken.plist", build_context(_config(), [], resource_root=tmp_path))

    assert excinfo.value.kind is ErrorKind.TEMPLATE
    assert excinfo.value.context["template"] == "broken.plist"


def test_undefined_variable_raises_template_error(tmp_path: Path) -> None:
    write_file(tmp_path / "unknown.plist", "<plist>{{ notAField }}</plist>")

    with pytest.raises(TemplateError) as excinfo:
        DescriptorRenderer(tmp_path).render("unknown.plist", build_context(_config(), [], resource_root=tmp_path))

    assert "unknown.plist" in str(excinfo.value)


def test_missing_template_raises_resource_not_found(tmp_path: Path) -> None:
    with pytest.raises(ResourceNotFoundError) as excinfo:
        DescriptorRenderer(tmp_path).render("nowhere.plist", {})

    assert excinfo.value.context["template"] == "nowhere.plist"


def test_unsupported_declared_encoding_raises_template_error(tmp_path: Path) -> None:
    write_file(
        tmp_path / "custom.plist",
        '<?xml version="1.0" encoding="x-mac-roman-bogus"?>\n<plist><string>{{ bundleName }}</string></plist>\n',
    )
    info_plist = tmp_path / "out" / "Info.plist"

    with pytest.raises(TemplateError) as excinfo:
        write_info_plist(
            info_plist,
            _config(dictionary_file="custom.plist"),
            [],
            renderer=DescriptorRenderer(tmp_path),
        )

    assert excinfo.value.kind is ErrorKind.TEMPLATE
    assert excinfo.value.context["template"] == "custom.plist"
    assert excinfo.value.context["encoding"] == "x-mac-roman-bogus"
    assert not info_plist.exists()


def test_unencodable_characters_become_character_references(tmp_path: Path) -> None:
    resource_root = tmp_path / "classes"
    write_file(
        resource_root / "ascii.plist",
        '<?xml version="1.0" encoding="US-ASCII"?>\n'
        '<plist version="1.0"><dict><key>CFBundleName</key><string>{{ bundleName }}</string></dict></plist>\n',
    )
    info_plist = tmp_path / "Info.plist"

    rendered = write_info_plist(
        info_plist,
        _config(bundle_name="Café", dictionary_file="ascii.plist"),
        [],
        renderer=DescriptorRenderer(resource_root),
    )

    assert rendered.encoding == "US-ASCII"
    assert b"<string>Caf&#233;</string>" in info_plist.read_bytes()
    with info_plist.open("rb") as handle:
        assert plistlib.load(handle)["CFBundleName"] == "Café"


def test_unset_vm_options_render_empty(tmp_path: Path) -> None:
    write_file(tmp_path / "bare.plist", "<string>{{ vmOptions }}</string>")

    rendered = DescriptorRenderer(tmp_path).render(
        "bare.plist", build_context(_config(), [], resource_root=tmp_path)
    )

    assert rendered.text == "<string></string>"
