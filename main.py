import sys

from rich.pretty import pprint

from pxargs import *


line = CommandLine("demo", "pxargs demonstration", shell=True)

helper = line.add_flag("help").set_tag("-h").set_long_tag("--help").set_description("show this help")
verbose = line.add_flag("verbose").set_tag("-v").set_long_tag("--verbose").set_description("be chatty")
count = (
    line.add_value("count", int)
    .set_tag("-c")
    .set_long_tag("--count")
    .set_description("how many times")
    .set_default(1)
    .set_validator(lambda count: count > 0)
)
output = line.add_value("output").set_tag("-o").set_long_tag("--output").set_required()
names = line.add_multi_value("name").set_tag("-n").set_long_tag("--name").set_description("repeatable")


if __name__ == '__main__':
    line.parse(sys.argv[1:])
    if helper.get_value():
        line.print_help()
        sys.exit(0)
    if not line.is_valid():
        line.print_help(sys.stderr)
        sys.exit(2)
    pprint({argument.name: argument.get_value() for argument in line if argument.has_value()})
