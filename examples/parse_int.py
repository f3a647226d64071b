"""
Fill four integer fields, one per pattern category.

    $ python examples/parse_int.py -f1 7 -f2 -f4
    The field of Fields is 7, 1024, 2, 1024
    $ python examples/parse_int.py --help

Arguments are read as 32-bit signed integers: an optional sign followed by
ASCII digits, nothing else (no blanks, no underscores).
"""
import re
from dataclasses import dataclass

from patternparse import PatternCategory, Registry, invoke

__prog__ = "parse-int"

INT32 = re.compile(r"[+-]?[0-9]+")


def int32(argument):
    if INT32.fullmatch(argument) and -2 ** 31 <= (number := int(argument)) < 2 ** 31:
        return number
    raise ValueError("fail to parse argument %r" % argument)


@dataclass
class Fields:
    f1: int = 0
    f2: int = 1
    f3: int = 2
    f4: int = 3


def main():
    registry = Registry(Fields())

    @registry.register("-f1", PatternCategory.WITH_ARG, "update f1 field of Fields")
    def on_f1(argument, fields):
        fields.f1 = int32(argument)

    @registry.register("-f2", PatternCategory.WITHOUT_ARG, "update f2 field of Fields")
    def on_f2(argument, fields):
        fields.f2 = 1024

    @registry.register("-f3", PatternCategory.OPTIONAL_WITH_ARG, "update f3 field of Fields")
    def on_f3(argument, fields):
        fields.f3 = int32(argument)

    @registry.register("-f4", PatternCategory.OPTIONAL_WITHOUT_ARG, "update f4 field of Fields")
    def on_f4(argument, fields):
        fields.f4 = 1024

    fields = invoke(registry)
    print("The field of Fields is %d, %d, %d, %d" % (fields.f1, fields.f2, fields.f3, fields.f4))


if __name__ == '__main__':
    main()
