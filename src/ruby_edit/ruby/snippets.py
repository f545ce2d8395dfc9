"""Ruby snippet templates.

Templates use the host's placeholder notation: ``%1(default)`` is a tab stop
with default text, a repeated ``%1`` mirrors it, ``%0`` is the final cursor
position and ``%[command]`` is replaced with the command's output. Expanding
them is left to the host.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, MutableMapping, Optional

_TEST_CASE = (
    "require 'test/unit'\n"
    "require '%1(library_file_name)'\n"
    "\n"
    "class Test%2(NameOfTestCases) < Test::Unit::TestCase\n"
    "\tdef test_%3(case_name)\n"
    "\t\t%0\n"
    "\tend\n"
    "end"
)

SNIPPETS: Mapping[str, str] = MappingProxyType(
    {
        # Structure
        "rb": "#!%[which ruby]",
        "app": "if __FILE__ == $PROGRAM_NAME\n\t%0\nend",
        "req": "require '%0'",
        "cla": "class %1(ClassName)\n\t%0\nend",
        "mod": "module %1(ModuleName)\n\t%0\nend",
        "def": "def %1(method_name)\n\t%0\nend",
        "defs": "def self.%1(class_method_name)\n\t%0\nend",
        "deft": "def test_%1(case_name)\n\t%0\nend",
        "mm": "def method_missing(meth, *args, &block)\n\t%0\nend",
        "am": "alias_method :%1(new_name), :%2(old_name)",
        "rw": "attr_accessor :%1(attr_names)",
        "r": "attr_reader :%1(attr_names)",
        "w": "attr_writer :%1(attr_names)",
        "tc": _TEST_CASE,
        # Control flow
        "if": "if %1(condition)\n\t%0\nend",
        "ife": "if %1(condition)\n\t%2\nelse\n\t%3\nend",
        "unless": "unless %1(condition)\n\t%0\nend",
        "case": "case %1(object)\nwhen %2(condition)\n\t%0\nend",
        "when": "when %1(condition)\n\t",
        "forin": "for %1(element) in %2(collection)\n\t%1.%0\nend",
        "do": "do\n\t%0\nend",
        "doo": "do |%1(object)|\n\t%0\nend",
        "lam": "lambda { |%1(args)| %0 }",
        # Files
        "Dir": "Dir.glob(%1(pattern)) do |%2(file)|\n\t%0\nend",
        "File": "File.foreach(%1('path/to/file')) do |%2(line)|\n\t%0\nend",
        "uni": "ARGF.each_line%1 do |%2(line)|\n\t%0\nend",
        # Hashes
        ":": ":%1(key) => '%2(value)',",
        "is": "=> ",
        # Enumerable
        "all": "all? { |%1(e)| %0 }",
        "any": "any? { |%1(e)| %0 }",
        "cl": "classify { |%1(e)| %0 }",
        "col": "collect { |%1(e)| %0 }",
        "collect": "collect { |%1(element)| %1.%0 }",
        "deli": "delete_if { |%1(e)| %0 }",
        "det": "detect { |%1(e)| %0 }",
        "each": "each { |%1(e)| %0 }",
        "eab": "each_byte { |%1(byte)| %0 }",
        "eac": "each_char { |%1(chr)| %0 }",
        "eaco": "each_cons(%1(2)) { |%2(group)| %0 }",
        "eai": "each_index { |%1(i)| %0 }",
        "eak": "each_key { |%1(key)| %0 }",
        "eal": "each_line%1 { |%2(line)| %0 }",
        "eap": "each_pair { |%1(name), %2(val)| %0 }",
        "eas": "each_slice(%1(2)) { |%2(group)| %0 }",
        "eav": "each_value { |%1(val)| %0 }",
        "eawi": "each_with_index { |%1(e), %2(i)| %0 }",
        "fin": "find { |%1(e)| %0 }",
        "fina": "find_all { |%1(e)| %0 }",
        "flao": "inject(Array.new) { |%1(arr), %2(a)| %1.push(*%2) }",
        "grep": "grep(%1(pattern)) { |%2(match)| %0 }",
        "gsu": "gsub(/%1(pattern)/) { |%2(match)| %0 }",
        "inj": "inject(%1(init)) { |%2(mem), %3(var)| %0 }",
        "map": "map { |%1(e)| %0 }",
        "mapwi": "enum_with_index.map { |%1(e), %2(i)| %0 }",
        "max": "max { |a, b| %0 }",
        "min": "min { |a, b| %0 }",
        "par": "partition { |%1(e)| %0 }",
        "ran": "sort_by { rand }",
        "rej": "reject { |%1(e)| %0 }",
        "rea": "reverse_each { |%1(e)| %0 }",
        "sca": "scan(/%1(pattern)/) { |%2(match)| %0 }",
        "sel": "select { |%1(e)| %0 }",
        "sor": "sort { |a, b| %0 }",
        "sorb": "sort_by { |%1(e)| %0 }",
        "ste": "step(%1(2)) { |%2(n)| %0 }",
        "sub": "sub(/%1(pattern)/) { |%2(match)| %0 }",
        "tim": "times { %1(n) %0 }",
        "upt": "upto(%1(2)) { |%2(n)| %0 }",
        "dow": "downto(%1(2)) { |%2(n)| %0 }",
        "zip": "zip(%1(enums)) { |%2(row)| %0 }",
        # Test::Unit assertions
        "as": "assert(%1(test), '%2(Failure message.)')",
        "ase": "assert_equal(%1(expected), %2(actual))",
        "asid": "assert_in_delta(%1(expected_float), %2(actual_float), %3(2 ** -20))",
        "asio": "assert_instance_of(%1(ExpectedClass), %2(actual_instance))",
        "asko": "assert_kind_of(%1(ExpectedKind), %2(actual_instance))",
        "asm": "assert_match(/%1(expected_pattern)/, %2(actual_string))",
        "asn": "assert_nil(%1(instance))",
        "asnm": "assert_no_match(/%1(unexpected_pattern)/, %2(actual_string))",
        "asne": "assert_not_equal(%1(unexpected), %2(actual))",
        "asnn": "assert_not_nil(%1(instance))",
        "asns": "assert_not_same(%1(unexpected), %2(actual))",
        "asnr": "assert_nothing_raised(%1(Exception)) { %0 }",
        "asnt": "assert_nothing_thrown { %0 }",
        "aso": "assert_operator(%1(left), :%2(operator), %3(right))",
        "asr": "assert_raise(%1(Exception)) { %0 }",
        "asrt": "assert_respond_to(%1(object), :%2(method))",
        "assa": "assert_same(%1(expected), %2(actual))",
        "asse": "assert_send([%1(object), :%2(message), %3(args)])",
        "ast": "assert_throws(:%1(expected)) { %0 }",
    }
)


def snippet(trigger: str) -> Optional[str]:
    return SNIPPETS.get(trigger)


def install_snippets(
    target: MutableMapping[str, str], *, replace: bool = False
) -> list[str]:
    """Copy the Ruby snippets into a host table and return the triggers added.

    Triggers the host already defines are left alone unless ``replace``.
    """

    installed: list[str] = []
    for trigger, template in SNIPPETS.items():
        if not replace and trigger in target:
            continue
        target[trigger] = template
        installed.append(trigger)
    return installed


__all__ = ["SNIPPETS", "snippet", "install_snippets"]
