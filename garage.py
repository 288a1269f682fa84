#!/usr/bin/env python3
"""
Unified CLI for truck tire tracking.

Commands:
  status      - Show tire wear status and what needs attention
  tires       - List every tire by position
  history     - View a tire's maintenance history
  swap        - Swap two tires between positions
  rotate      - Apply the X-rotation to the traction axle
  occurrence  - Log an occurrence (puncture, retread, blowout...) on a tire
  tread       - Record a tread depth reading
  pressure    - Record a pressure adjustment
  edit-tire   - Edit a tire's purchase data or km
  settings    - Edit the truck's model, plate or odometer
  owner       - Show or edit the company and driver details
  trip        - Start, edit, complete or list trips
  context     - Print the truck summary given to the advisor
"""

import argparse
import logging
import sys
from pathlib import Path
from tabulate import tabulate
from typing import Iterable, List, Optional

from fleet import (
    FleetError,
    RecordKind,
    Tire,
    TireStatus,
    Trip,
    Truck,
    locate_tire,
    load_truck,
    save_truck,
    swap_tires,
    x_rotate,
    plan_x_rotation,
    record_occurrence,
    update_tread_depth,
    log_pressure,
    edit_tire,
    edit_truck,
    edit_owner,
    new_trip,
    start_trip,
    edit_active_trip,
    complete_trip,
    truck_context,
)
from fleet.trips import total_trip_km

# =============================================================================
# Formatting helpers
# =============================================================================


def format_km(km: Optional[float]) -> str:
    """Format kilometers for display."""
    return f"{km:,.0f}" if km is not None else "-"


def format_cost(cost: Optional[float]) -> str:
    """Format cost for display."""
    return f"${cost:,.2f}" if cost is not None else "-"


def format_mm(depth: Optional[float]) -> str:
    return f"{depth:g} mm" if depth is not None else "-"


def format_cpk(cpk: Optional[float]) -> str:
    """Format cost per km with enough precision for cents per km."""
    return f"${cpk:.4f}" if cpk is not None else "-"


def truncate(text: Optional[str], max_len: int = 40) -> str:
    """Truncate text with ellipsis if too long."""
    if not text:
        return "-"
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


# =============================================================================
# Table builders
# =============================================================================


def make_tire_table(truck: Truck, tires: Iterable[Tire]) -> List[List[str]]:
    """Convert tires to table rows, positions looked up on the truck."""
    rows = []
    for tire in tires:
        location = locate_tire(truck, tire.id)
        rows.append(
            [
                location.position if location else tire.position or "-",
                tire.id,
                tire.brand or "-",
                format_km(tire.km_run),
                format_mm(tire.tread_depth_mm),
                tire.status.label,
                format_cpk(tire.cpk),
            ]
        )
    return rows


def make_history_table(tire: Tire) -> List[List[str]]:
    """Convert a tire's history to table rows, oldest first."""
    return [
        [
            record.date,
            record.kind.value,
            truncate(record.description),
            format_cost(record.cost),
        ]
        for record in tire.history
    ]


def make_trip_table(trips: Iterable[Trip]) -> List[List[str]]:
    rows = []
    for trip in trips:
        rows.append(
            [
                trip.origin,
                trip.destination,
                format_km(trip.distance_km),
                trip.start_date or "-",
                trip.completed_date or trip.planned_arrival_date or "-",
                trip.status.value,
            ]
        )
    return rows


TIRE_HEADERS = ["Position", "Tire", "Brand", "Run (km)", "Tread", "Status", "CPK"]


def print_truck_header(truck: Truck) -> None:
    print(f"Truck: {truck.name}")
    print(f"Odometer: {format_km(truck.total_km)} km")
    if truck.active_trip is not None:
        trip = truck.active_trip
        print(f"Active trip: {trip.route} ({format_km(trip.distance_km)} km)")


def save_or_preview(args, truck: Truck, message: str) -> int:
    """Save the updated truck unless --dry-run was given."""
    if args.dry_run:
        print("(dry run - no changes made)")
        return 0
    save_truck(args.truck_file, truck)
    print(message)
    return 0


# =============================================================================
# Read-only commands
# =============================================================================


def cmd_status(args):
    """Show tire wear status and what needs attention."""
    truck = load_truck(args.truck_file)
    print_truck_header(truck)

    counts = truck.status_counts()
    print(f"Tires: {sum(counts.values())} ({len(truck.spares)} spare)")
    for status in TireStatus:
        if counts[status]:
            print(f"  {status.label}: {counts[status]}")
    print()

    attention = truck.tires_needing_attention()
    if attention:
        print("NEEDS ATTENTION:")
        print(
            tabulate(
                make_tire_table(truck, attention),
                headers=TIRE_HEADERS,
                tablefmt="simple",
            )
        )
        print()
    else:
        print("No tires need attention.")
    return 0


def cmd_tires(args):
    """List every tire by position."""
    truck = load_truck(args.truck_file)
    print_truck_header(truck)
    print()

    tires = list(truck.all_tires())
    if args.status:
        wanted = TireStatus[args.status.upper()]
        tires = [t for t in tires if t.status == wanted]

    if not tires:
        print("No tires found.")
        return 0
    rows = make_tire_table(truck, tires)
    print(tabulate(rows, headers=TIRE_HEADERS, tablefmt="simple"))
    return 0


def cmd_history(args):
    """View a tire's maintenance history."""
    truck = load_truck(args.truck_file)
    tire = truck.get_tire(args.tire_id)
    location = locate_tire(truck, tire.id)

    print(f"Tire: {tire.id} {tire.brand} {tire.model} ({tire.size})")
    print(f"Position: {location.position}")
    print(f"Run: {format_km(tire.km_run)} km, tread {format_mm(tire.tread_depth_mm)}")
    print(f"Status: {tire.status.label}")
    print(f"Rotations: {len(tire.rotations)}, retreads: {tire.retread_count}")
    if tire.maintenance_cost:
        print(f"Maintenance cost: {format_cost(tire.maintenance_cost)}")
    print()

    if not tire.history:
        print("No history entries found.")
        return 0
    headers = ["Date", "Type", "Description", "Cost"]
    print(tabulate(make_history_table(tire), headers=headers, tablefmt="simple"))
    return 0


def cmd_context(args):
    """Print the truck summary given to the advisor."""
    truck = load_truck(args.truck_file)
    print(truck_context(truck))
    return 0


# =============================================================================
# Rotation commands
# =============================================================================


def cmd_swap(args):
    """Swap two tires between positions."""
    truck = load_truck(args.truck_file)
    # The engine ignores stale ids; on the command line they are a typo
    for tire_id in (args.tire_a, args.tire_b):
        truck.get_tire(tire_id)

    before_a = locate_tire(truck, args.tire_a).position
    before_b = locate_tire(truck, args.tire_b).position
    updated = swap_tires(truck, args.tire_a, args.tire_b)

    print(f"{args.tire_a}: {before_a} -> {before_b}")
    print(f"{args.tire_b}: {before_b} -> {before_a}")
    print()
    return save_or_preview(args, updated, "Swap saved.")


def cmd_rotate(args):
    """Apply the X-rotation to the traction axle."""
    truck = load_truck(args.truck_file)
    axle_index = args.axle - 1 if args.axle is not None else None

    moves = plan_x_rotation(truck, axle_index=axle_index)
    rows = [[m.tire_id, m.from_position, m.to_position] for m in moves]
    print(tabulate(rows, headers=["Tire", "From", "To"], tablefmt="simple"))
    print()

    if args.preview:
        return 0
    updated = x_rotate(truck, axle_index=axle_index)
    return save_or_preview(args, updated, "Rotation saved.")


# =============================================================================
# Tire update commands
# =============================================================================


def cmd_occurrence(args):
    """Log an occurrence on a tire."""
    truck = load_truck(args.truck_file)
    tire = truck.get_tire(args.tire_id)
    kind = RecordKind[args.kind.upper()]

    updated = record_occurrence(
        truck, tire.id, kind, args.description or "", args.cost or 0, args.date
    )
    new_status = updated.get_tire(tire.id).status
    print(f"Adding {kind.value} to tire {tire.id}")
    print(f"  Status: {tire.status.label} -> {new_status.label}")
    print()
    return save_or_preview(args, updated, "Occurrence saved.")


def cmd_tread(args):
    """Record a tread depth reading."""
    truck = load_truck(args.truck_file)
    tire = truck.get_tire(args.tire_id)

    updated = update_tread_depth(truck, tire.id, args.depth)
    new_status = updated.get_tire(tire.id).status
    old, new = format_mm(tire.tread_depth_mm), format_mm(args.depth)
    print(f"Tire {tire.id}: {old} -> {new}")
    print(f"  Status: {tire.status.label} -> {new_status.label}")
    print()
    return save_or_preview(args, updated, "Tread depth saved.")


def cmd_pressure(args):
    """Record a pressure adjustment."""
    truck = load_truck(args.truck_file)
    tire = truck.get_tire(args.tire_id)

    updated = log_pressure(truck, tire.id, args.psi, args.date)
    print(f"Tire {tire.id}: pressure {args.psi:g} PSI")
    print()
    return save_or_preview(args, updated, "Pressure saved.")


def cmd_edit_tire(args):
    """Edit a tire's purchase data or odometer reading."""
    truck = load_truck(args.truck_file)
    tire = truck.get_tire(args.tire_id)

    fields = {
        "brand": args.brand,
        "model": args.model,
        "dot": args.dot,
        "size": args.size,
        "purchase_price": args.price,
        "purchase_date": args.purchase_date,
        "store": args.store,
        "current_km": args.km,
    }
    fields = {k: v for k, v in fields.items() if v is not None}
    if not fields:
        print("Nothing to change.")
        return 0

    updated = edit_tire(truck, tire.id, **fields)
    new_status = updated.get_tire(tire.id).status
    print(f"Tire {tire.id}: " + ", ".join(f"{k}={v}" for k, v in fields.items()))
    print(f"  Status: {tire.status.label} -> {new_status.label}")
    print()
    return save_or_preview(args, updated, "Tire saved.")


# =============================================================================
# Truck settings commands
# =============================================================================


def cmd_settings(args):
    """Edit the truck's model, plate or odometer."""
    truck = load_truck(args.truck_file)
    updated = edit_truck(
        truck, model=args.model, plate=args.plate, total_km=args.total_km
    )
    if updated is truck:
        print("Nothing to change.")
        return 0

    print(f"Truck: {truck.name} -> {updated.name}")
    print(
        f"  Odometer: {format_km(truck.total_km)} -> {format_km(updated.total_km)} km"
    )
    print()
    return save_or_preview(args, updated, "Truck settings saved.")


def cmd_owner(args):
    """Show or edit the company and driver details."""
    truck = load_truck(args.truck_file)
    fields = {
        "name": args.name,
        "driver_name": args.driver,
        "city": args.city,
        "street": args.street,
        "number": args.number,
        "phone": args.phone,
        "email": args.email,
    }
    fields = {k: v for k, v in fields.items() if v is not None}

    updated = edit_owner(truck, **fields) if fields else truck
    owner = updated.owner
    if owner is None:
        print("No owner registered.")
        return 0
    address = ", ".join(p for p in (owner.street, owner.number, owner.city) if p)
    rows = [
        ["Company", owner.name],
        ["Driver", owner.driver_name],
        ["Address", address or "-"],
        ["Phone", owner.phone or "-"],
        ["Email", owner.email or "-"],
    ]
    print(tabulate(rows, tablefmt="simple"))
    print()
    if updated is truck:
        return 0
    return save_or_preview(args, updated, "Owner saved.")


# =============================================================================
# Trip commands
# =============================================================================


def cmd_trip(args):
    """Start, edit, complete or list trips."""
    truck = load_truck(args.truck_file)

    if args.trip_command == "list":
        print_truck_header(truck)
        print(f"Completed trips: {len(truck.trip_history)}")
        print(f"Completed distance: {format_km(total_trip_km(truck))} km")
        print()
        if not truck.trip_history:
            print("No completed trips.")
            return 0
        headers = ["Origin", "Destination", "Distance (km)", "Start", "End", "Status"]
        rows = make_trip_table(truck.trip_history)
        print(tabulate(rows, headers=headers, tablefmt="simple"))
        return 0

    if args.trip_command == "start":
        trip = new_trip(
            args.origin, args.destination, args.distance, args.start, args.arrival
        )
        updated = start_trip(truck, trip)
        print(f"Starting trip {trip.route} ({format_km(trip.distance_km)} km)")
        print()
        return save_or_preview(args, updated, "Trip started.")

    if args.trip_command == "edit":
        updated = edit_active_trip(
            truck,
            origin=args.origin,
            destination=args.destination,
            distance_km=args.distance,
        )
        trip = updated.active_trip
        print(f"Active trip: {trip.route} ({format_km(trip.distance_km)} km)")
        print()
        return save_or_preview(args, updated, "Trip updated.")

    # complete
    trip = truck.active_trip
    updated = complete_trip(truck)
    installed = sum(1 for _ in updated.installed_tires())
    print(f"Completing trip {trip.route if trip else '-'}")
    print(
        f"  Odometer: {format_km(truck.total_km)} -> {format_km(updated.total_km)} km"
    )
    print(f"  {installed} mounted tire(s) credited, spares unchanged")
    print()
    return save_or_preview(args, updated, "Trip completed.")


# =============================================================================
# Main
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Truck tire tracker",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s trucks/volvo-fh540.yaml status
  %(prog)s trucks/volvo-fh540.yaml tires --status critical
  %(prog)s trucks/volvo-fh540.yaml history FIRE-003
  %(prog)s trucks/volvo-fh540.yaml swap FIRE-001 STP-001
  %(prog)s trucks/volvo-fh540.yaml rotate --preview
  %(prog)s trucks/volvo-fh540.yaml occurrence FIRE-004 puncture \\
      --description "Nail, patched" --cost 80
  %(prog)s trucks/volvo-fh540.yaml tread FIRE-005 6.5
  %(prog)s trucks/volvo-fh540.yaml trip start --origin Fortaleza \\
      --destination Recife --distance 800 \\
      --start 2025-05-01T08:00 --arrival 2025-05-02T18:00
  %(prog)s trucks/volvo-fh540.yaml trip complete
  %(prog)s trucks/volvo-fh540.yaml settings --total-km 125000
  %(prog)s trucks/volvo-fh540.yaml owner --phone "(88) 98888-0000"
""",
    )
    parser.add_argument(
        "truck_file",
        type=Path,
        help="Path to truck YAML file",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("status", help="Show tire wear status")

    tires_parser = subparsers.add_parser("tires", help="List every tire by position")
    tires_parser.add_argument(
        "--status",
        choices=[s.name.lower() for s in TireStatus],
        help="Only show tires with this status",
    )

    history_parser = subparsers.add_parser("history", help="View a tire's history")
    history_parser.add_argument("tire_id", help="Tire fire number (e.g., FIRE-003)")

    swap_parser = subparsers.add_parser("swap", help="Swap two tires")
    swap_parser.add_argument("tire_a", help="First tire fire number")
    swap_parser.add_argument("tire_b", help="Second tire fire number")

    rotate_parser = subparsers.add_parser(
        "rotate", help="Apply the X-rotation to the traction axle"
    )
    rotate_parser.add_argument(
        "--axle",
        type=int,
        help="Axle number (1-based) instead of the traction axle",
    )
    rotate_parser.add_argument(
        "--preview",
        action="store_true",
        help="Only show the planned moves",
    )

    occurrence_parser = subparsers.add_parser(
        "occurrence", help="Log an occurrence on a tire"
    )
    occurrence_parser.add_argument("tire_id", help="Tire fire number")
    occurrence_parser.add_argument(
        "kind",
        choices=[k.name.lower() for k in RecordKind if k != RecordKind.ROTATION],
        help="Occurrence type",
    )
    occurrence_parser.add_argument("--description", type=str, help="What happened")
    occurrence_parser.add_argument("--cost", type=float, help="Cost of the repair")
    occurrence_parser.add_argument(
        "--date", type=str, help="When it happened (ISO-8601, default: now)"
    )

    tread_parser = subparsers.add_parser("tread", help="Record a tread depth reading")
    tread_parser.add_argument("tire_id", help="Tire fire number")
    tread_parser.add_argument("depth", type=float, help="Tread depth in mm")

    pressure_parser = subparsers.add_parser(
        "pressure", help="Record a pressure adjustment"
    )
    pressure_parser.add_argument("tire_id", help="Tire fire number")
    pressure_parser.add_argument("psi", type=float, help="Pressure in PSI")
    pressure_parser.add_argument(
        "--date", type=str, help="When it was adjusted (ISO-8601, default: now)"
    )

    edit_tire_parser = subparsers.add_parser(
        "edit-tire", help="Edit a tire's purchase data or km"
    )
    edit_tire_parser.add_argument("tire_id", help="Tire fire number")
    edit_tire_parser.add_argument("--brand")
    edit_tire_parser.add_argument("--model")
    edit_tire_parser.add_argument("--dot", help="Manufacture code")
    edit_tire_parser.add_argument("--size", help="e.g. 295/80R22.5")
    edit_tire_parser.add_argument("--price", type=float, help="Purchase price")
    edit_tire_parser.add_argument("--purchase-date", help="Purchase date (ISO-8601)")
    edit_tire_parser.add_argument("--store", help="Where it was bought")
    edit_tire_parser.add_argument("--km", type=float, help="Current km")

    settings_parser = subparsers.add_parser(
        "settings", help="Edit the truck's model, plate or odometer"
    )
    settings_parser.add_argument("--model")
    settings_parser.add_argument("--plate")
    settings_parser.add_argument("--total-km", type=float, help="Odometer in km")

    owner_parser = subparsers.add_parser(
        "owner", help="Show or edit the company and driver details"
    )
    owner_parser.add_argument("--name", help="Company name")
    owner_parser.add_argument("--driver", help="Driver name")
    owner_parser.add_argument("--city")
    owner_parser.add_argument("--street")
    owner_parser.add_argument("--number")
    owner_parser.add_argument("--phone")
    owner_parser.add_argument("--email")

    trip_parser = subparsers.add_parser("trip", help="Manage trips")
    trip_sub = trip_parser.add_subparsers(dest="trip_command", required=True)
    trip_sub.add_parser("list", help="List completed trips")
    start_parser = trip_sub.add_parser("start", help="Start a trip")
    start_parser.add_argument("--origin", required=True)
    start_parser.add_argument("--destination", required=True)
    start_parser.add_argument("--distance", type=float, required=True, help="km")
    start_parser.add_argument("--start", required=True, help="Start (ISO-8601)")
    start_parser.add_argument(
        "--arrival", required=True, help="Planned arrival (ISO-8601)"
    )
    edit_parser = trip_sub.add_parser("edit", help="Edit the active trip")
    edit_parser.add_argument("--origin")
    edit_parser.add_argument("--destination")
    edit_parser.add_argument("--distance", type=float, help="km")
    complete_parser = trip_sub.add_parser("complete", help="Complete the active trip")

    subparsers.add_parser("context", help="Print the advisor truck summary")

    for sub in (
        swap_parser,
        rotate_parser,
        occurrence_parser,
        tread_parser,
        pressure_parser,
        edit_tire_parser,
        settings_parser,
        owner_parser,
        start_parser,
        edit_parser,
        complete_parser,
    ):
        sub.add_argument(
            "--dry-run",
            action="store_true",
            help="Show what would change without saving",
        )

    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)-8s %(name)s: %(message)s",
    )

    # Validate truck file exists
    if not args.truck_file.exists():
        print(f"Error: File not found: {args.truck_file}")
        return 1

    # Dispatch to command handler
    try:
        if args.command == "status":
            return cmd_status(args)
        elif args.command == "tires":
            return cmd_tires(args)
        elif args.command == "history":
            return cmd_history(args)
        elif args.command == "swap":
            return cmd_swap(args)
        elif args.command == "rotate":
            return cmd_rotate(args)
        elif args.command == "occurrence":
            return cmd_occurrence(args)
        elif args.command == "tread":
            return cmd_tread(args)
        elif args.command == "pressure":
            return cmd_pressure(args)
        elif args.command == "trip":
            return cmd_trip(args)
        elif args.command == "edit-tire":
            return cmd_edit_tire(args)
        elif args.command == "settings":
            return cmd_settings(args)
        elif args.command == "owner":
            return cmd_owner(args)
        elif args.command == "context":
            return cmd_context(args)
    except FleetError as e:
        print(f"Error: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main() or 0)
