# python
"""
Layout behavioral tests (arguments, switches and routes).

Scope
- Validate display terms for positionals (placeholders, brackets, variadics).
- Validate display terms for flags (aliases, placeholders, required types).
- Validate route expansion of simple and namespace commands, including shared
  entries, nested options, hidden bases and name de-duplication.
- Validate "[key]" substitution from the parent sub-command.

Conventions
- Test method names follow CamelCase per project convention.
- Options are built through descriptor()/compile_signature(), as a backend would see them.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from signet import (
    CommandOption,
    Route,
    argument,
    compile_signature,
    descriptor,
    routes,
    switch,
)

GROUP = """
    group:
        {install : Install a package | {--force : Force it} {--dry : Dry run}}
        {^--o|out=txt : The output format : [txt, json]}
        {name? : The package name}
"""


class TestArgument(TestCase):
    """Behavioral tests for argument()."""

    def testRequiredTerm(self):
        self.assertEqual(argument(descriptor("name : Name")).term, "<name>")

    def testOptionalTerm(self):
        self.assertEqual(argument(descriptor("name? : Name")).term, "[name]")

    def testVariadicTerms(self):
        self.assertEqual(argument(descriptor("files* : Files")).term, "<files...>")
        self.assertEqual(argument(descriptor("files?* : Files")).term, "[files...]")

    def testDefaultCarried(self):
        mapped = argument(descriptor("name=help : The command name"))
        self.assertEqual(mapped.term, "[name]")
        self.assertEqual(mapped.default, "help")
        self.assertEqual(mapped.description, "The command name")

    def testChoicesCarried(self):
        self.assertEqual(argument(descriptor("mode : Mode : fast, slow")).choices, ["fast", "slow"])

    def testFlagRejected(self):
        with self.assertRaises(ValueError):
            argument(descriptor("--verbose : Verbose"))
        with self.assertRaises(TypeError):
            argument("name")  # type: ignore[arg-type]


class TestSwitch(TestCase):
    """Behavioral tests for switch()."""

    def testPlainFlag(self):
        mapped = switch(descriptor("--verbose : Verbose"))
        self.assertEqual(mapped.term, "--verbose")
        self.assertEqual(mapped.flags, ["--verbose"])
        self.assertIsNone(mapped.default)

    def testPlaceholderAppended(self):
        mapped = switch(descriptor("--o|out=txt : The output format : [txt, json]"))
        self.assertEqual(mapped.term, "-o, --out [out]")
        self.assertEqual(mapped.default, "txt")
        self.assertEqual(mapped.choices, ["txt", "json"])

    def testRequiredWithoutPlaceholderShowsType(self):
        option = CommandOption("log-level", ["--log-level"], required=True)
        self.assertEqual(switch(option).term, "--log-level <loglevel>")

    def testPositionalRejected(self):
        with self.assertRaises(ValueError):
            switch(descriptor("name : Name"))

    def testParentSubstitution(self):
        parent = descriptor("install : Install")
        option = descriptor("--dry : Simulate [name], keep [unknown]")
        self.assertEqual(switch(option, parent).description, "Simulate install, keep [unknown]")
        self.assertEqual(switch(option).description, "Simulate [name], keep [unknown]")


class TestRoutes(TestCase):
    """Behavioral tests for routes()."""

    def testSimpleCommand(self):
        route, = routes(compile_signature("hello\n{name=help : Name}\n{--o|out=txt : Output}"))
        self.assertIsInstance(route, Route)
        self.assertEqual(route.name, "hello")
        self.assertEqual([entry.term for entry in route.arguments], ["[name]"])
        self.assertEqual([entry.term for entry in route.switches], ["-o, --out [out]"])
        self.assertFalse(route.hidden)

    def testHiddenSimpleCommand(self):
        route, = routes(compile_signature("#hello\n{name : Name}"))
        self.assertTrue(route.hidden)

    def testNamespaceCommand(self):
        base, install, name = routes(compile_signature(GROUP))
        self.assertEqual([base.name, install.name, name.name], ["group", "group:install", "group:name"])
        self.assertEqual([entry.term for entry in base.switches], ["-o, --out [out]"])
        self.assertEqual(
            [entry.term for entry in install.switches],
            ["-o, --out [out]", "--force", "--dry"],
        )
        self.assertEqual(install.description, "Install a package")
        self.assertEqual([entry.term for entry in name.switches], ["-o, --out [out]"])
        self.assertEqual(name.arguments, [])

    def testHiddenNamespaceHasNoBaseRoute(self):
        names = [route.name for route in routes(compile_signature("#group:\n{install : Install}"))]
        self.assertEqual(names, ["group:install"])

    def testSharedPositionalsAttachToEverySubcommand(self):
        parsed = compile_signature("group:\n{a : A} {b : B} {^target? : Target of [name]}")
        base, a, b = routes(parsed)
        self.assertEqual([entry.term for entry in a.arguments], ["[target]"])
        self.assertEqual(a.arguments[0].description, "Target of a")
        self.assertEqual(b.arguments[0].description, "Target of b")
        self.assertEqual(base.arguments, [])

    def testDuplicatesDropped(self):
        route, = routes(compile_signature("dup\n{a : First} {a : Second}"))
        self.assertEqual([entry.description for entry in route.arguments], ["First"])
        names = [route.name for route in routes(compile_signature("g:\n{x : X} {x : Y}"))]
        self.assertEqual(names, ["g", "g:x"])

    def testArgumentAndSwitchMayShareAName(self):
        route, = routes(compile_signature("convert\n{out : Output file} {--o|out=txt : Output format}"))
        self.assertEqual([entry.term for entry in route.arguments], ["<out>"])
        self.assertEqual([entry.term for entry in route.switches], ["-o, --out [out]"])

    def testDescriptionDefaultsToEmpty(self):
        self.assertEqual(routes(compile_signature("hello"))[0].description, "")

    def testNonParsedRejected(self):
        with self.assertRaises(TypeError):
            routes("hello")  # type: ignore[arg-type]


if __name__ == "__main__":
    unittest.main()
