"""Starter snippets offered to editors, keyed by language id."""

from __future__ import annotations

from typing import Dict, Optional

from .languages import normalize_id


TEMPLATES: Dict[str, Dict[str, str]] = {
    "javascript": {
        "hello": 'console.log("Hello, World!");',
        "function": (
            "function greet(name) {\n  return `Hello, ${name}!`;\n}\n\n"
            'console.log(greet("World"));'
        ),
        "input": (
            "// Reading input from stdin\n"
            "const readline = require('readline');\n"
            "const rl = readline.createInterface({\n"
            "  input: process.stdin,\n"
            "  output: process.stdout\n"
            "});\n\n"
            "rl.question('Enter your name: ', (name) => {\n"
            "  console.log(`Hello, ${name}!`);\n"
            "  rl.close();\n"
            "});"
        ),
    },
    "python": {
        "hello": 'print("Hello, World!")',
        "function": 'def greet(name):\n    return f"Hello, {name}!"\n\nprint(greet("World"))',
        "input": (
            "# Reading input\n"
            'name = input("Enter your name: ")\n'
            'age = input("Enter your age: ")\n'
            'print(f"Hello {name}, you are {age} years old!")'
        ),
    },
    "java": {
        "hello": (
            "public class Main {\n"
            "    public static void main(String[] args) {\n"
            '        System.out.println("Hello, World!");\n'
            "    }\n"
            "}"
        ),
        "input": (
            "import java.util.Scanner;\n\n"
            "public class Main {\n"
            "    public static void main(String[] args) {\n"
            "        Scanner scanner = new Scanner(System.in);\n"
            '        System.out.print("Enter your name: ");\n'
            "        String name = scanner.nextLine();\n"
            '        System.out.println("Hello, " + name + "!");\n'
            "    }\n"
            "}"
        ),
    },
    "cpp": {
        "hello": (
            "#include <iostream>\nusing namespace std;\n\n"
            'int main() {\n    cout << "Hello, World!" << endl;\n    return 0;\n}'
        ),
        "input": (
            "#include <iostream>\n#include <string>\nusing namespace std;\n\n"
            "int main() {\n"
            "    string name;\n"
            "    int age;\n"
            '    cout << "Enter your name: ";\n'
            "    cin >> name;\n"
            '    cout << "Enter your age: ";\n'
            "    cin >> age;\n"
            '    cout << "Hello " << name << ", you are " << age << " years old!" << endl;\n'
            "    return 0;\n"
            "}"
        ),
    },
    "c": {
        "hello": '#include <stdio.h>\n\nint main() {\n    printf("Hello, World!\\n");\n    return 0;\n}',
        "input": (
            "#include <stdio.h>\n\n"
            "int main() {\n"
            "    char name[50];\n"
            "    int age;\n"
            '    printf("Enter your name: ");\n'
            '    scanf("%49s", name);\n'
            '    printf("Enter your age: ");\n'
            '    scanf("%d", &age);\n'
            '    printf("Hello %s, you are %d years old!\\n", name, age);\n'
            "    return 0;\n"
            "}"
        ),
    },
    "go": {
        "hello": 'package main\n\nimport "fmt"\n\nfunc main() {\n    fmt.Println("Hello, World!")\n}',
        "input": (
            'package main\n\nimport "fmt"\n\n'
            "func main() {\n"
            "    var name string\n"
            '    fmt.Print("Enter your name: ")\n'
            "    fmt.Scan(&name)\n"
            '    fmt.Printf("Hello %s!\\n", name)\n'
            "}"
        ),
    },
    "rust": {
        "hello": 'fn main() {\n    println!("Hello, World!");\n}',
        "input": (
            "use std::io;\n\n"
            "fn main() {\n"
            "    let mut name = String::new();\n"
            '    println!("Enter your name: ");\n'
            '    io::stdin().read_line(&mut name).expect("Failed to read");\n'
            '    println!("Hello {}!", name.trim());\n'
            "}"
        ),
    },
    "php": {
        "hello": '<?php\necho "Hello, World!\\n";\n?>',
        "input": (
            "<?php\n"
            'echo "Enter your name: ";\n'
            "$name = trim(fgets(STDIN));\n"
            'echo "Hello $name!\\n";\n'
            "?>"
        ),
    },
    "csharp": {
        "hello": (
            "using System;\n\n"
            "class Program {\n"
            "    static void Main() {\n"
            '        Console.WriteLine("Hello, World!");\n'
            "    }\n"
            "}"
        ),
        "input": (
            "using System;\n\n"
            "class Program {\n"
            "    static void Main() {\n"
            '        Console.Write("Enter your name: ");\n'
            "        string name = Console.ReadLine();\n"
            '        Console.WriteLine($"Hello {name}!");\n'
            "    }\n"
            "}"
        ),
    },
    "bash": {
        "hello": 'echo "Hello, World!"',
        "input": 'read -r -p "Enter your name: " name\necho "Hello, $name!"',
    },
}


def get_templates(language: str) -> Optional[Dict[str, str]]:
    return TEMPLATES.get(normalize_id(language))
