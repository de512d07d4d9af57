import unittest

from type_names import owner_names, parse_type, qualified_protocols, type_usage_names


class TypeNamesTest(unittest.TestCase):
    def test_plain_object_pointer(self):
        self.assertEqual(owner_names("Foo *"), ["Foo"])
        self.assertEqual(type_usage_names("Foo *"), ["Foo"])

    def test_qualifiers_and_nullability_are_stripped(self):
        self.assertEqual(owner_names("__kindof Foo *"), ["Foo"])
        self.assertEqual(owner_names("Foo * _Nullable"), ["Foo"])
        self.assertEqual(owner_names("const Foo *__strong"), ["Foo"])

    def test_dynamic_receivers(self):
        self.assertEqual(owner_names("id"), ["id"])
        self.assertEqual(owner_names("instancetype"), ["id"])
        self.assertEqual(owner_names(""), ["id"])

    def test_qualified_id_uses_protocols(self):
        self.assertEqual(owner_names("id<Drawable>"), ["Drawable"])
        self.assertEqual(owner_names("id<Drawable, Sizable>"), ["Drawable", "Sizable"])
        self.assertEqual(qualified_protocols("id<Drawable>"), ["Drawable"])
        self.assertEqual(qualified_protocols("Foo *"), [])

    def test_class_with_protocols_keeps_base(self):
        self.assertEqual(owner_names("Foo<Drawable> *"), ["Foo", "Drawable"])
        self.assertEqual(type_usage_names("Foo<Drawable> *"), ["Foo", "Drawable"])

    def test_generic_arguments_are_type_uses_not_protocols(self):
        parsed = parse_type("NSArray<NSString *> *")
        self.assertEqual(parsed.base, "NSArray")
        self.assertEqual(parsed.protocols, [])
        self.assertEqual(type_usage_names("NSArray<NSString *> *"), ["NSArray", "NSString"])
        self.assertEqual(
            type_usage_names("NSDictionary<NSString *, NSArray<Foo *> *> *"),
            ["NSDictionary", "NSString", "NSArray", "Foo"],
        )

    def test_tag_keyword_is_dropped(self):
        self.assertEqual(type_usage_names("struct Point"), ["Point"])

    def test_id_is_not_a_type_use(self):
        self.assertEqual(type_usage_names("id"), [])
        self.assertEqual(type_usage_names("id<Drawable>"), ["Drawable"])


if __name__ == "__main__":
    unittest.main()
