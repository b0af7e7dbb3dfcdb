import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from uafixtures.php_values import PhpValueError, load_php_array, parse_php_array  # noqa: E402


def test_short_and_long_array_syntax_with_keys() -> None:
    source = """<?php
declare(strict_types = 1);

// vendor fixtures
return [
    'Samsung' => array(
        'Mozilla/5.0 (Linux; Android 9; SM-G960F)' => ['isMobile' => true, 'isTablet' => false, 'model' => null],
    ),
    "Generic" => [],
];
"""

    assert parse_php_array(source) == {
        "Samsung": {
            "Mozilla/5.0 (Linux; Android 9; SM-G960F)": {
                "isMobile": True,
                "isTablet": False,
                "model": None,
            }
        },
        "Generic": [],
    }


def test_lists_numbers_and_numeric_keys() -> None:
    source = "<?php return [[['UA'], ['', '', 'Chrome', '70.0', 1, 2.5]], '7' => 'seven', -3];"

    value = parse_php_array(source)

    assert value[0] == [["UA"], ["", "", "Chrome", "70.0", 1, 2.5]]
    assert value[7] == "seven"
    assert value[8] == -3


def test_string_escapes_and_concatenation() -> None:
    source = r"""<?php
namespace Fixtures;
use Some\Thing;
/* block
   comment */
return ['ua' => 'it\'s ' . "a \"quoted\"\tvalue\\n", 'path' => 'C:\\temp'];
"""

    assert parse_php_array(source) == {"ua": 'it\'s a "quoted"\tvalue\\n', "path": "C:\\temp"}


def test_unsupported_expressions_raise() -> None:
    with pytest.raises(PhpValueError):
        parse_php_array("<?php return ['a' => SomeClass::CONSTANT];")
    with pytest.raises(PhpValueError):
        parse_php_array("<?php echo 'nothing';")
    with pytest.raises(PhpValueError):
        parse_php_array("<?php return ['unterminated' => 1")


def test_load_php_array_reads_file(tmp_path: Path) -> None:
    path = tmp_path / "provider.php"
    path.write_text("<?php\n\nreturn ['UA-1' => ['isMobile' => false]];\n")

    assert load_php_array(path) == {"UA-1": {"isMobile": False}}
