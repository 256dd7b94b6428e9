# jobshell

A small interactive UNIX shell with job control. It runs programs in the
foreground or the background, keeps track of jobs that are stopped or
running in the background, and lets you move them between the two.

## Installation

```
pip install .
```

It needs a POSIX system and Python 3.10 or later.

## Usage

Start the shell:

```
jobshell
```

You get a `COMMAND->` prompt. Type `^D` (end of input) to leave. The shell
prints `Bye` and exits.

### Running commands

- `ls -l` runs in the foreground. The shell waits for it and reports how it
  ended, for example `Foreground pid: 4242, command: ls, Exited, info: 0`.
  If the program cannot be started, the shell prints
  `Error, command not found: <name>` and no report line.
- `sleep 30 &` runs in the background. The shell reports
  `Background job running... pid: ..., command: sleep` and returns at once.
- Pressing `^Z` on a foreground command suspends it. The shell reports it and
  adds it to the job list as stopped.

Arguments are separated by spaces or tabs. A `&` ends the command line and
marks it as a background job. Anything after it is ignored.

### Built-in commands

| Command     | Effect                                                                |
|-------------|-----------------------------------------------------------------------|
| `cd [dir]`  | Change directory. With no argument, go to `$HOME`.                    |
| `jobs`      | List the jobs, newest first, with pid, command and state.            |
| `fg [n]`    | Bring job `n` (default 1) to the foreground, resuming it if stopped, and wait for it. |
| `bg [n]`    | Resume stopped job `n` (default 1) in the background.                 |

Job positions count from 1, newest first, as `jobs` shows them:

```
Contents of Lista de jobs:
 [1] pid: 4310, command: vim, state: Stopped
 [2] pid: 4301, command: sleep, state: Background
```

A position outside the list gives `Error, invalid position: <n>`.

When a listed job stops, resumes or exits, the shell prints a line saying so
(`Process suspended, ...`, `Process continued, ...`, `Process exited, ...`)
and updates the list. An exited job is taken off the list.

## What it does not do

The shell runs one program per line. It has no pipes, no quoting or escaping
of arguments, and no variable expansion. It does not apply `<` or `>`
redirections to the commands it runs. The words are passed to the program
unchanged. `parse_redirections` (below) can separate redirections from the
other arguments, but the shell itself does not call it.

## Using it from Python

You can use the parts of the shell on their own:

- `jobshell.parsing.parse_command(line)` splits a command line into a
  `Command`, which holds its `args`, its `background` flag and its `name`.
- `jobshell.parsing.parse_redirections(args)` takes `<` and `>` targets out of
  an argument list. It returns `(remaining, file_in, file_out)` and raises
  `RedirectionError` when an operator has no file name after it.
- `jobshell.jobs.JobList` holds `Job` entries. Each entry has a `pgid`, a
  `command` and a `JobState` (`FOREGROUND`, `BACKGROUND` or `STOPPED`). The
  list offers `add`, `remove`, `by_pid`, `by_position`, `len()`, iteration and
  `format()`.
- `jobshell.jobs.analyze_status(status)` turns a raw wait status into a
  `Status` (`SUSPENDED`, `SIGNALED`, `EXITED` or `CONTINUED`) and the number
  that goes with it.
- `jobshell.signals` provides the following:
  - `terminal_signals(handler)` installs a handler for the terminal signals.
  - `ignore_terminal_signals()` ignores them.
  - `restore_terminal_signals()` restores their defaults.
  - `sigchld_blocked()` is a context manager that blocks `SIGCHLD` while the
    block runs.
- `jobshell.shell.Shell(stdin, stdout, stderr)` is the interactive loop, and
  its `run()` method runs it. `jobshell.shell.main()` starts it on the
  process's standard streams.