"""Shared pytest fixtures for codeshift-mcp test suite.

This module provides common fixtures used across unit and integration tests,
reducing duplication and standardizing test setup.
"""

# Add project root to path for imports
import sys
from pathlib import Path
from typing import Dict

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from codeshift_mcp.core.config import set_config  # noqa: E402
from codeshift_mcp.models.config import TransformerConfig  # noqa: E402

# ============================================================================
# Sample Snippets
# ============================================================================

SAMPLES: Dict[str, str] = {
    "python": (
        "import os\n"
        "\n"
        "def greet(name, greeting=\"Hello\"):\n"
        "    if name is None:\n"
        "        return False\n"
        "    elif name == \"\":\n"
        "        print(\"empty\")\n"
        "    else:\n"
        "        print(greeting, name)\n"
        "    for i in range(3):\n"
        "        count = i\n"
        "    return True"
    ),
    "javascript": (
        "const fs = require('fs');\n"
        "\n"
        "function greet(name) {\n"
        "  if (name === null && !done) {\n"
        "    console.log(\"none\");\n"
        "  } else {\n"
        "    console.log(name);\n"
        "  }\n"
        "  for (let i = 0; i < 3; i++) {\n"
        "    let total = i;\n"
        "  }\n"
        "  return true;\n"
        "}"
    ),
    "typescript": (
        "function greet(name: string): void {\n"
        "  const message: string = \"hi\";\n"
        "  if (name !== undefined) {\n"
        "    console.log(message, name);\n"
        "  }\n"
        "}"
    ),
    "java": (
        "public class Greeter {\n"
        "    public static void greet(String name) {\n"
        "        int count = 0;\n"
        "        for (String part : parts) {\n"
        "            System.out.println(part);\n"
        "        }\n"
        "    }\n"
        "}"
    ),
    "cpp": (
        "#include <iostream>\n"
        "\n"
        "int main() {\n"
        "    int x = 5;\n"
        "    if (x > 3) {\n"
        "        std::cout << x << std::endl;\n"
        "    }\n"
        "    return 0;\n"
        "}"
    ),
    "go": (
        "package main\n"
        "\n"
        "func main() {\n"
        "\tx := 5\n"
        "\tif x > 3 {\n"
        "\t\tfmt.Println(x)\n"
        "\t}\n"
        "}"
    ),
    "rust": (
        "fn main() {\n"
        "    let mut x = 5;\n"
        "    for i in 0..3 {\n"
        "        println!(\"{}\", i);\n"
        "    }\n"
        "}"
    ),
    "csharp": (
        "using System;\n"
        "\n"
        "public class Program {\n"
        "    public static void Main(string[] args) {\n"
        "        var name = \"x\";\n"
        "        Console.WriteLine(name);\n"
        "    }\n"
        "}"
    ),
    "php": (
        "<?php\n"
        "function greet($name) {\n"
        "    $count = 1;\n"
        "    echo $name;\n"
        "}"
    ),
    "ruby": (
        "def greet(name)\n"
        "  if name.nil?\n"
        "    puts \"none\"\n"
        "  elsif name == \"\"\n"
        "    puts \"empty\"\n"
        "  else\n"
        "    puts name\n"
        "  end\n"
        "end"
    ),
}


@pytest.fixture
def samples() -> Dict[str, str]:
    """Representative snippet per registered language."""
    return dict(SAMPLES)


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def reset_config():
    """Restore default settings after a test changes them."""
    set_config(TransformerConfig())
    yield
    set_config(TransformerConfig())


@pytest.fixture
def config_file(tmp_path):
    """Factory writing a YAML config file and returning its path."""
    def _write(content: str) -> str:
        path = tmp_path / "codeshift.yaml"
        path.write_text(content)
        return str(path)
    return _write
