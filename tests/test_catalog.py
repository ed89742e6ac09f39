from __future__ import annotations

import unittest
from dataclasses import dataclass, field
from datetime import timedelta

from config_layers import Float32, Int8, InvalidTargetError, UInt16, build_catalog, embed, setting
from config_layers.fields import FieldKind, classify


@dataclass
class Credentials:
    user: str = setting("admin", zero="")
    password: str = setting(zero="")


@dataclass
class Common:
    name: str = setting("svc", zero="")


@dataclass
class Root:
    common: Common = embed(Common)
    port: int = setting("8080", zero=0)
    auth: Credentials = field(default_factory=Credentials)
    _secret: str = "hidden"
    tags: list = field(default_factory=list)


@dataclass
class Inherited(Common):
    level: str = setting("info", zero="")


@dataclass
class Outer:
    inner: Root = field(default_factory=Root)


@dataclass(frozen=True)
class Frozen:
    value: int = 1


@dataclass
class WithFrozen:
    frozen: Frozen = field(default_factory=Frozen)
    other: int = setting(zero=0)


@dataclass
class Unset:
    auth: Credentials = None  # type: ignore[assignment]


class ClassifyTests(unittest.TestCase):
    def test_leaf_kinds(self) -> None:
        self.assertEqual(classify(bool), (FieldKind.BOOL, None))
        self.assertEqual(classify(str), (FieldKind.STRING, None))
        self.assertEqual(classify(int), (FieldKind.INT, 64))
        self.assertEqual(classify(float), (FieldKind.FLOAT, 64))
        self.assertEqual(classify(timedelta), (FieldKind.DURATION, 64))

    def test_width_aliases(self) -> None:
        self.assertEqual(classify(Int8), (FieldKind.INT, 8))
        self.assertEqual(classify(UInt16), (FieldKind.UINT, 16))
        self.assertEqual(classify(Float32), (FieldKind.FLOAT, 32))

    def test_groups_and_unsupported(self) -> None:
        self.assertEqual(classify(Credentials)[0], FieldKind.GROUP)
        self.assertEqual(classify(list)[0], FieldKind.UNSUPPORTED)
        self.assertEqual(classify(dict[str, int])[0], FieldKind.UNSUPPORTED)
        self.assertEqual(classify(int | None)[0], FieldKind.UNSUPPORTED)


class BuildCatalogTests(unittest.TestCase):
    def test_leaves_in_declaration_order(self) -> None:
        fields = build_catalog(Root())
        self.assertEqual(
            [f.full_name for f in fields],
            ["name", "port", "auth.user", "auth.password", "tags"],
        )

    def test_kinds_and_raw_defaults(self) -> None:
        fields = {f.full_name: f for f in build_catalog(Root())}
        self.assertEqual(fields["port"].kind, FieldKind.INT)
        self.assertEqual(fields["port"].default_value, "8080")
        self.assertEqual(fields["auth.user"].default_value, "admin")
        self.assertEqual(fields["auth.password"].default_value, "")
        self.assertEqual(fields["tags"].kind, FieldKind.UNSUPPORTED)

    def test_private_fields_are_skipped(self) -> None:
        names = [f.name for f in build_catalog(Root())]
        self.assertNotIn("_secret", names)

    def test_embedded_group_adds_no_segment(self) -> None:
        fields = build_catalog(Root())
        name = fields[0]
        self.assertEqual(name.full_name, "name")
        self.assertIsNone(name.parent)

    def test_embedded_group_inside_named_group(self) -> None:
        names = [f.full_name for f in build_catalog(Outer())]
        self.assertIn("inner.name", names)
        self.assertIn("inner.auth.user", names)

    def test_inherited_fields_are_flat(self) -> None:
        names = [f.full_name for f in build_catalog(Inherited())]
        self.assertEqual(names, ["name", "level"])

    def test_parents_are_shared(self) -> None:
        fields = {f.full_name: f for f in build_catalog(Root())}
        self.assertIs(fields["auth.user"].parent, fields["auth.password"].parent)
        self.assertEqual(fields["auth.user"].parent.name, "auth")

    def test_locations_write_through_to_record(self) -> None:
        record = Root()
        fields = {f.full_name: f for f in build_catalog(record)}
        fields["auth.user"].location.set("root")
        fields["name"].location.set("api")
        self.assertEqual(record.auth.user, "root")
        self.assertEqual(record.common.name, "api")

    def test_frozen_groups_are_not_writable(self) -> None:
        names = [f.full_name for f in build_catalog(WithFrozen())]
        self.assertEqual(names, ["other"])

    def test_unset_group_is_created(self) -> None:
        record = Unset()
        names = [f.full_name for f in build_catalog(record)]
        self.assertEqual(names, ["auth.user", "auth.password"])
        self.assertIsInstance(record.auth, Credentials)

    def test_records_declared_in_a_function(self) -> None:
        @dataclass
        class LocalCommon:
            name: str = setting("local", zero="")

        @dataclass
        class LocalInner:
            port: int = setting("1", zero=0)
            timeout: timedelta = setting(zero=None)

        @dataclass
        class LocalOuter:
            common: LocalCommon = embed(LocalCommon)
            inner: LocalInner = field(default_factory=LocalInner)
            small: Int8 = setting(zero=0)

        record = LocalOuter()
        fields = {f.full_name: f for f in build_catalog(record)}
        self.assertEqual(list(fields), ["name", "inner.port", "inner.timeout", "small"])
        self.assertEqual(fields["inner.port"].kind, FieldKind.INT)
        self.assertEqual(fields["inner.timeout"].kind, FieldKind.DURATION)
        self.assertEqual((fields["small"].kind, fields["small"].bits), (FieldKind.INT, 8))
        fields["inner.port"].location.set(9)
        self.assertEqual(record.inner.port, 9)

    def test_unresolvable_annotation(self) -> None:
        class Opaque:
            pass

        @dataclass
        class LocalHolder:
            value: Opaque = None  # type: ignore[assignment]

        with self.assertRaises(InvalidTargetError):
            build_catalog(LocalHolder())

    def test_invalid_targets(self) -> None:
        for target in [Root, {"port": 1}, 42, Frozen()]:
            with self.subTest(target=target):
                with self.assertRaises(InvalidTargetError):
                    build_catalog(target)


if __name__ == "__main__":
    unittest.main()
