# procsim

`procsim` runs a small simulation of a parent process that manages child
processes over discrete timestamps. The parent reads a timeline from a config
file and spawns or terminates children at the timestamps it names. After each
tick that leaves at least one child active, the parent picks an active child at
random and hands it a random non-blank line from a text file. Parent and
children pass messages through a named shared memory block, and take turns
through semaphores. Children are real operating-system processes started with
`multiprocessing`.

## Installation

```
pip install .
```

To run the test suite:

```
pip install .[test]
pytest
```

## Usage

```
procsim CONFIG_FILE TEXT_FILE M
```

- `CONFIG_FILE`: the timeline of spawn and terminate commands.
- `TEXT_FILE`: the file from which random lines are sent to the children.
- `M`: the number of semaphores, which is also the most children that can be
  active at once. It is read leniently: a leading integer is used and
  anything else counts as 0, in which case no child is ever spawned.

With fewer than three arguments the command prints a message to standard error
and exits with status 1. It also exits with status 1 and a message on standard
error when:

- the config file cannot be opened or is malformed;
- the text file holds no non-blank line;
- `M` is negative.

### Config file format

Each line except the last holds a timestamp, a process name and a one-letter
command. The command is `S` to spawn the process or `T` to terminate it. The
first line that does not have that shape but starts with an integer ends the
timeline, and that integer is the exit timestamp. Nothing after it is read.

```
0 C1 S
2 C2 S
5 C1 T
8 C2 T
10 EXIT
```

A line that starts with no integer at all is a format error. So is a command
other than `S` or `T`.

The parent takes at most one command per timestamp, in file order. Lines must
therefore appear in strictly increasing timestamp order. A spawn is ignored in
two cases: when `M` children are already active, or when the named process is
already running. A terminate is ignored for a process that is not active.
Children still running when the exit timestamp is reached are terminated then.

### Output

While reading the config, each command line and the exit timestamp are echoed.
During the run:

- the parent prints each timestamp and every child it spawns;
- each child prints the messages it receives;
- a terminated child prints how many timestamps it ran for and how many
  requests it served.

## Library use

- `procsim.config`
  - `read_config(config_file, text_file)` returns a `(Config, Processes)` pair.
    It raises `ConfigError` if the file cannot be opened or is malformed.
  - `Config` holds `text_file` and the ordered `entries`, each a
    `ConfigEntry` with `timestamp`, `process_name`, `command` and
    `process_index`.
  - `Processes` holds `info`, a list of `ProcessInfo`, and `end_timestamp`.
    It also offers `n`, `is_process_defined(name)` and
    `get_process_index(name)`; the latter raises `KeyError` for an unknown
    name.
  - `count_file_lines(file_name)` counts the lines of a file.
  - `choose_random_file_line(file_name, rng=None)` returns a random non-blank
    line without its newline. It raises `ValueError` if there is none.
- `procsim.semaphores`
  - `create_semaphores(count, context=None)` and
    `create_semaphore_print(context=None)` build semaphores that start at zero.
  - `assign_semaphore_to_process(processes, process_index, count)` returns the
    lowest semaphore index not held by an active process, or `None`.
- `procsim.shm`
  - `create_shared_memory(name="shared_memory", size=1024)` creates the named
    block, or attaches to it if it already exists.
  - It returns a `SharedBuffer` with `write`, `read`, `close`, `unlink` and
    `name`. Writes are truncated to `size - 1` bytes.
- `procsim.child`
  - `spawn_child`, `terminate_child` and `child_process` start, stop and run
    one child.
  - `child_process` returns the number of timestamps run and of requests
    served.
- `procsim.parent`
  - `parent_process(config, processes, semaphore_count)` runs the whole
    simulation and returns the final timestamp.
  - `choose_random_active_child(processes, rng=None)` picks the active child
    that receives the next message. It raises `ValueError` if none is active.
- `procsim.cli`
  - `main(argv=None)` is the `procsim` command and returns its exit status.