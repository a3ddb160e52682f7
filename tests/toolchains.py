"""Skip markers for tests that need toolchains installed on the host."""

import shutil

import pytest


def requires(*binaries: str):
    missing = [binary for binary in binaries if shutil.which(binary) is None]
    return pytest.mark.skipif(
        bool(missing), reason=f"toolchain not installed: {', '.join(missing)}"
    )


# Interpreted languages with a program printing 1+1 and one looping forever.
INTERPRETED = [
    ("python", "python3", "print(1+1)", "while True:\n    pass\n"),
    ("javascript", "node", "console.log(1+1)", "while(true){}"),
    ("ruby", "ruby", "puts 1+1", "loop {}"),
    ("php", "php", '<?php echo 1+1, "\\n";', "<?php while(true){}"),
    ("perl", "perl", 'print 1+1, "\\n";', "while(1){}"),
    ("lua", "lua", "print(1+1)", "while true do end"),
    ("bash", "bash", "echo $((1+1))", "while true; do :; done"),
    ("r", "Rscript", 'cat(1+1, "\\n", sep="")', "repeat {}"),
]
