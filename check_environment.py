#!/usr/bin/env python3
"""Check that the scoring environment is ready."""

import sys
from pathlib import Path


def check_python_version():
    print("🐍 Checking Python version...")
    version = sys.version_info
    if version.major == 3 and version.minor >= 10:
        print(f"  ✅ Python {version.major}.{version.minor}.{version.micro}")
        return True
    print(f"  ❌ Python {version.major}.{version.minor}.{version.micro} (needs >= 3.10)")
    return False


def check_dependencies():
    print("\n📦 Checking dependencies...")

    dependencies = {
        "numpy": "numerics",
        "cv2": "OpenCV image processing",
        "PIL": "Pillow image decoding",
        "anthropic": "remote vision scoring",
        "pydantic_settings": "configuration",
    }

    all_ok = True
    for package, description in dependencies.items():
        try:
            module = __import__(package)
            version = getattr(module, "__version__", "unknown")
            print(f"  ✅ {package} ({description}): {version}")
        except ImportError:
            print(f"  ❌ {package} ({description}): not installed")
            all_ok = False

    return all_ok


def check_api_key():
    print("\n🔑 Checking remote scorer configuration...")

    from bcs_finder.config import get_settings

    settings = get_settings()
    if settings.has_api_key:
        print(f"  ✅ ANTHROPIC_API_KEY is set (model: {settings.bcs_remote_model})")
        return True
    print("  ⚠️  ANTHROPIC_API_KEY is missing or still a placeholder")
    print("  💡 Add it to .env to enable --method remote")
    return False


def check_yolo_availability():
    print("\n🤖 Checking local classifier...")

    try:
        from ultralytics import YOLO  # noqa: F401
    except ImportError:
        print("  ❌ ultralytics is not installed")
        print("  💡 Install it with: pip install ultralytics")
        return False

    from bcs_finder.config import get_settings

    print("  ✅ ultralytics is installed")
    model_file = Path(get_settings().bcs_classifier_model)
    if model_file.exists():
        print(f"  ✅ {model_file} found")
    else:
        print(f"  ⚠️  {model_file} not found locally, it will be downloaded on first use")
    return True


def main():
    print("\n" + "=" * 80)
    print("🔧 BCS scoring environment check")
    print("=" * 80)

    checks = [
        ("Python version", check_python_version),
        ("Dependencies", check_dependencies),
        ("Remote scorer", check_api_key),
        ("Local classifier", check_yolo_availability),
    ]

    results = {}
    for name, check_func in checks:
        try:
            results[name] = check_func()
        except Exception as e:
            print(f"\n❌ {name} check failed: {e}")
            results[name] = False

    print("\n" + "=" * 80)
    print("📊 Results")
    print("=" * 80)
    for name, result in results.items():
        status = "✅" if result else "❌"
        print(f"{status} {name}")

    passed = sum(1 for r in results.values() if r)
    print(f"\nPassed: {passed}/{len(results)}")
    if passed == len(results):
        print("\n🎉 All checks passed! Run: python main.py <folder>")
    else:
        print("\n⚠️  Some checks failed, see the hints above")
    print("=" * 80 + "\n")


if __name__ == "__main__":
    main()
