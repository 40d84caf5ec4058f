from pushflow import DiscreteValueStream, TimeVaryingValue

# ------------------------------------------------------------------------------------------------

print()
print("=" * 100)
print("Defining a time-varying value")
print("-" * 100)
print()

# A time-varying value always has a value, starting with the one you give it.
temperature = TimeVaryingValue.starting_with(20)

# Each value has exactly one change callback. Registering another one replaces it.
temperature.on_change(lambda value: print(f"Temperature changed to: {value}"))
temperature.change_to(22)

# ------------------------------------------------------------------------------------------------

print()
print("=" * 100)
print("Following other values")
print("-" * 100)
print()

# Operators build new values that recompute whenever their sources change.
fahrenheit = temperature * 9 / 5 + 32
print(f"Fahrenheit right away: {fahrenheit.current}")


# Or spell the computation out with follows().
def describe(celsius, f):
    return f"{celsius}°C is {f}°F"


description = TimeVaryingValue.follows(temperature, fahrenheit, fn=describe)
description.on_change(print)

temperature.change_to(30)

# ------------------------------------------------------------------------------------------------

print()
print("=" * 100)
print("Streams of values")
print("-" * 100)
print()

# A manual stream is empty until something is added to it.
clicks = DiscreteValueStream.manual()
print(f"Empty at first: {clicks.is_empty}")

# Derived streams don't compute until a value arrives.
labels = clicks.call_method("upper")
labels.on_addition(lambda label: print(f"Clicked: {label}"))

clicks.add_value("ok")
clicks.add_value("cancel")

# A time-varying value can adopt each value added to a stream.
last_click = TimeVaryingValue.tracks_stream(clicks, "nothing yet")
print(f"Last click: {last_click.current}")
clicks.add_value("retry")
print(f"Last click: {last_click.current}")

# ------------------------------------------------------------------------------------------------

print()
print("=" * 100)
print("Diamonds recompute once per path")
print("-" * 100)
print()

origin = TimeVaryingValue.starting_with(1)
combined = TimeVaryingValue.follows(origin + 1, origin * 2, fn=lambda a, b: a + b)

# The first callback sees a mix of one updated and one stale operand.
combined.on_change(lambda value: print(f"combined -> {value}"))
origin.change_to(10)
