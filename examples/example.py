#!/usr/bin/env simplecli
# An example command set. Run it with: simplecli examples/example.py
import os
import time


def banner():
    # Printed once when the shell starts
    return "Example CLI"


def prompt():
    # Called before every line; return the prompt to show
    return time.strftime("%H:%M:%S") + "> "


def do_helloworld(args):
    # Prints the first argument. Arguments aren't padded, so default them
    first = args[0] if args else "nobody"
    print(f"Hello world: {first}")


# Help for a command lives in help_<name>. Blank lines around it and
# indentation on every line are stripped.
help_helloworld = """
    A simple hello world command

    Usage: helloworld ARG
"""


def do_anotherhello():
    # Commands that don't need their arguments can skip the parameter
    print("Another hello world!")


# Top-level strings, numbers and booleans are variables with defaults
# and can be set with flags: simplecli example.py --myvar other
myvar = "default_value"


def do_myvar(args):
    # Get or set a string variable
    cli_variable("myvar", args[0] if args else "")


def do_profile(args):
    # Get or set an environment variable
    cli_envvar("AWS_PROFILE", args[0] if args else "")


def do_debug(args):
    # Flip a boolean; undeclared booleans start out false
    cli_toggle("debug_mode")


def do_cmd(args):
    # External commands run through the shell, so pipelines work
    who = args[0] if args else "world"
    os.system(f"echo Hello {who} | sed s/foo/bar/")


# A command with a second parameter gets the path of an empty temporary
# file that is deleted as soon as the command returns.
def do_edit(args, tempfile):
    os.system(f"curl -s -o {tempfile} 'httpbin.org/get?foo=hello%20world'")
    if cli_edit(tempfile):
        os.system(
            "curl -X POST -H 'Content-type: application/json' "
            f"httpbin.org/post -d @{tempfile}"
        )


def do_cat(args, tempfile):
    # Download to the scratch file, then show it
    os.system(f"curl -s -o {tempfile} https://www.example.com/")
    os.system(f"cat {tempfile}")


def do_template(args):
    print(t("Myvar is: {{myvar}}"))
    # Functions are called when their tag is rendered
    print(t("This calls the banner() function: {{banner}}"))
    # Local variables work too, including the argument list
    localvar = "Hello world"
    print(t("localvar is: {{localvar}}"))
    print(t("first arg: {{args[0]}}; second arg: {{args[1]}}"))
    some_table = {"a": "foo", "b": "bar", "c": "baz"}
    print(t("some_table[a]: {{some_table[a]}}"))


cwd = "/"


def do_cd(args):
    # Like cli_variable, with relative path handling
    cli_cd("cwd", args[0] if args else "")
