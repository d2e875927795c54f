#!/usr/bin/env python3
"""
phaseflow Smoke Test

Quick import and basic functionality test to ensure the package is working.
This test should run fast and catch major import/API issues.
"""

import sys
import traceback
from pathlib import Path

# Add project root to path for testing
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


def test_core_imports():
    """Test that core phaseflow modules import successfully."""
    print("Testing core imports...")

    import phaseflow as pf
    print(f"✅ phaseflow {pf.__version__}")

    from phaseflow.expressions import VectorField
    from phaseflow.integrators import integrate
    from phaseflow.tracking import build_trajectory, PlaybackCursor
    from phaseflow.fields import sample_2d, sample_3d, SelectorCanvas
    from phaseflow.visualization import plot_trajectories_3d

    print("✅ Core modules imported successfully")


def test_basic_functionality():
    """Test basic functionality with the default system."""
    print("\nTesting basic functionality...")

    import phaseflow as pf

    session = pf.Session("y", "-x", config=pf.PackageConfig(steps=50))
    traj = session.add_trajectory(1.0, 0.0)
    assert len(traj.forward) == 50 and len(traj.backward) == 50
    print(f"✅ Trajectory built: final forward state {traj.forward.final}")

    session.update_vector_field_2d(visible=True)
    session.update_director_field(visible=True)
    n2d = len(session.vector_field_2d_arrows())
    n3d = len(session.director_field_arrows())
    assert n2d > 0 and n3d > 0
    print(f"✅ Overlays sampled: {n2d} field arrows, {n3d} director arrows")

    cursor = session.playback()[0]
    cursor.advance(0.5)
    print(f"✅ Playback cursor: {cursor}")


def test_system_info():
    """Test system information functions."""
    print("\nTesting system information...")

    from phaseflow.utils import memory_info

    info = memory_info()
    print(f"✅ Memory: {info['rss_mb']:.1f} MB RSS, {info['available_mb']:.0f} MB available")


def main():
    """Run all smoke tests."""
    print("phaseflow Smoke Test")
    print("=" * 50)

    tests = [
        ("Core Imports", test_core_imports),
        ("Basic Functionality", test_basic_functionality),
        ("System Info", test_system_info),
    ]

    passed = 0
    total = len(tests)

    for name, test_func in tests:
        print(f"\n🧪 Running: {name}")
        try:
            test_func()
            passed += 1
            print(f"✅ {name}: PASSED")
        except Exception as e:
            print(f"❌ {name}: ERROR - {e}")
            traceback.print_exc()

    print(f"\n📊 Results: {passed}/{total} tests passed")

    if passed == total:
        print("🎉 All smoke tests PASSED!")
        return 0
    else:
        print("💥 Some smoke tests FAILED!")
        return 1


if __name__ == "__main__":
    exit_code = main()
    sys.exit(exit_code)
