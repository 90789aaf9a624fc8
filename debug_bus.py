import sys, os, random
ROOT=os.path.dirname(__file__); SRC=os.path.join(ROOT,'src');
if SRC not in sys.path: sys.path.insert(0,SRC)
from samegame.events import bus as events
from samegame.events.bus import EventBus, EVENT_AUTOPLAY_TOGGLE, EVENT_TICK
from samegame.world import create_world
from samegame.systems.board import BoardSystem
from samegame.systems.merge_resolution import MergeResolutionSystem
from samegame.systems.auto_solver import AutoSolverSystem

bus=EventBus(); world=create_world(rng=random.Random(int(sys.argv[1]) if len(sys.argv) > 1 else 0))
BoardSystem(world,bus,8)
MergeResolutionSystem(world,bus)
AutoSolverSystem(world,bus,delay=0.1)
names=[getattr(events,n) for n in dir(events) if n.startswith('EVENT_') and n!='EVENT_TICK']
for name in names:
    bus.subscribe(name, lambda sender, _name=name, **payload: print(_name, payload))
bus.emit(EVENT_AUTOPLAY_TOGGLE, enabled=True)
for _ in range(50): bus.emit(EVENT_TICK, dt=0.1)
