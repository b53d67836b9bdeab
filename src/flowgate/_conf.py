"""
Process level settings for FlowGate
"""
import sys
import platform
import multiprocessing as mp

# A running debugger (or a tracing tool other than coverage) disables the process pool
debug = sys.gettrace() is not None and 'coverage' not in sys.modules

# 'fork' is unsafe with threaded libraries on macOS and unavailable on Windows
_start_methods = mp.get_all_start_methods()

if platform.system().lower() in ('linux', 'darwin') and 'forkserver' in _start_methods:
    mp_context = 'forkserver'
else:
    mp_context = 'spawn'

multi_proc = mp_context in _start_methods

# Events below this count are not worth the overhead of a process pool
mp_min_event_count = 100000
