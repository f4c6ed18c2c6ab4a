"""Language registry.

The registry is the static catalog of languages the online compiler offers,
each paired with the identifier the remote judge uses to pick a runtime and
a starter program shown when the language is selected.

The catalog and the starter table are validated against each other when the
registry is built.  A language that is missing its starter program (or a
starter program without a catalog entry) is a configuration error and fails
at import time rather than when a user happens to pick that language.

A single module-level :data:`registry` is constructed once and shared by
every editor session; it is never mutated afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Mapping, Tuple

from .exceptions import ConfigurationError, UnknownLanguage


@dataclass(frozen=True)
class LanguageOption:
    """A selectable language.

    Attributes
    ----------
    display_name: str
        Label shown in the language picker.
    service_id: str
        Opaque identifier understood by the judge service.  Two options are
        the same language iff their ``service_id`` values are equal.
    """

    display_name: str
    service_id: str

    @property
    def judge_language_id(self) -> int:
        """Numeric ``language_id`` sent on the wire."""
        return int(self.service_id)


LANGUAGES: Tuple[LanguageOption, ...] = (
    LanguageOption("Python", "71"),
    LanguageOption("C++", "54"),
    LanguageOption("Java", "62"),
    LanguageOption("C", "50"),
    LanguageOption("JavaScript", "63"),
    LanguageOption("Rust", "73"),
    LanguageOption("Ruby", "72"),
    LanguageOption("Go", "60"),
    LanguageOption("PHP", "68"),
)


DEFAULT_SOURCES: Dict[str, str] = {
    "71": """# Python Code
def greet(name):
    return f"Hello, {name}!"

name = input("Enter your name: ")
print(greet(name))""",
    "54": """// C++ Code
#include <iostream>
using namespace std;
int main() {
    string name;
    cout << "Enter your name: ";
    cin >> name;
    cout << "Hello, " << name << "!" << endl;
    return 0;
}""",
    "62": """// Java Code
import java.util.Scanner;
public class Main {
    public static void main(String[] args) {
        Scanner sc = new Scanner(System.in);
        System.out.print("Enter your name: ");
        String name = sc.nextLine();
        System.out.println("Hello, " + name + "!");
    }
}""",
    "50": r"""// C Code
#include <stdio.h>
int main() {
    char name[50];
    printf("Enter your name: ");
    scanf("%s", name);
    printf("Hello, %s!\n", name);
    return 0;
}""",
    "63": """// JavaScript Code
function greet(name) {
    return "Hello, " + name + "!";
}
console.log(greet("World"));""",
    "73": """// Rust Code
use std::io;
fn main() {
    let mut name = String::new();
    println!("Enter your name: ");
    io::stdin().read_line(&mut name).expect("Failed to read input");
    println!("Hello, {}!", name.trim());
}""",
    "72": """# Ruby Code
def greet(name)
  return "Hello, #{name}!"
end

puts greet("World")""",
    "60": """// Go Code
package main
import "fmt"
func main() {
    var name string
    fmt.Print("Enter your name: ")
    fmt.Scanln(&name)
    fmt.Println("Hello,", name)
}""",
    "68": """<?php
// PHP Code
function greet($name) {
    return "Hello, " . $name . "!";
}
echo greet("World");
?>""",
}


class LanguageRegistry:
    """Read-only catalog of languages and their starter programs."""

    def __init__(
        self,
        catalog: Iterable[LanguageOption],
        default_sources: Mapping[str, str],
    ) -> None:
        self._catalog = tuple(catalog)
        if not self._catalog:
            raise ConfigurationError("Language catalog is empty")

        ids = [option.service_id for option in self._catalog]
        duplicates = sorted({sid for sid in ids if ids.count(sid) > 1})
        if duplicates:
            raise ConfigurationError(f"Duplicate service ids in catalog: {duplicates}")

        missing = sorted(set(ids) - set(default_sources))
        extra = sorted(set(default_sources) - set(ids))
        if missing or extra:
            raise ConfigurationError(
                "Language catalog and default sources disagree: "
                f"missing starters for {missing}, starters without a language {extra}"
            )

        self._by_id = {option.service_id: option for option in self._catalog}
        self._default_sources = dict(default_sources)

    def __contains__(self, service_id: object) -> bool:
        return service_id in self._by_id

    def __len__(self) -> int:
        return len(self._catalog)

    def list_languages(self) -> Tuple[LanguageOption, ...]:
        """Return the catalog in display order."""
        return self._catalog

    def first(self) -> LanguageOption:
        return self._catalog[0]

    def get(self, service_id: str) -> LanguageOption:
        try:
            return self._by_id[service_id]
        except KeyError:
            raise UnknownLanguage(service_id) from None

    def default_source(self, service_id: str) -> str:
        """Return the starter program for ``service_id``.

        Raises
        ------
        UnknownLanguage
            If ``service_id`` is not in the catalog.
        """
        try:
            return self._default_sources[service_id]
        except KeyError:
            raise UnknownLanguage(service_id) from None


registry = LanguageRegistry(LANGUAGES, DEFAULT_SOURCES)
