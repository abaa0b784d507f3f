from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "3b1c9e2d7a41"
down_revision = None
branch_labels = None
depends_on = None

EVENT_TYPES = ("wedding", "corporate", "private", "ramadan", "other")
MEAL_FORMATS = ("light_refreshments", "full_dinner", "iftar")
PAYMENT_PLANS = ("venue_only_deposit", "half_deposit", "full_payment")
BOOKING_STATUSES = ("pending", "approved", "rejected", "confirmed", "cancelled", "completed")
PAYMENT_STATUSES = ("pending", "partial", "paid", "refunded")


def _money(name):
    return sa.Column(name, sa.Numeric(12, 2), nullable=False, server_default="0")


def upgrade():
    op.create_table(
        "bookings",
        sa.Column("id", sa.Integer(), primary_key=True),

        # Contact
        sa.Column("full_name", sa.String(100), nullable=False),
        sa.Column("phone", sa.String(20), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("company_name", sa.String(100), nullable=True),

        # Event
        sa.Column("event_type", sa.Enum(*EVENT_TYPES, name="eventtype"), nullable=False),
        sa.Column("event_date", sa.Date(), nullable=False),
        sa.Column("spaces", sa.JSON(), nullable=False),
        sa.Column("guest_count", sa.Integer(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("agreed_to_rules", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("agreed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("transfer_slip_url", sa.String(), nullable=True),

        # Services
        sa.Column("decor_package", sa.String(), nullable=True),
        sa.Column("av_package", sa.String(), nullable=True),
        sa.Column("catering_package", sa.String(), nullable=True),
        sa.Column("meal_format", sa.Enum(*MEAL_FORMATS, name="mealformat"), nullable=True),
        sa.Column("bring_own_vendor", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("payment_plan", sa.Enum(*PAYMENT_PLANS, name="paymentplan"), nullable=False),

        # Quote snapshot
        _money("venue_total_mvr"),
        _money("venue_total_usd"),
        _money("decor_total_mvr"),
        _money("decor_total_usd"),
        _money("av_total_mvr"),
        _money("av_total_usd"),
        _money("catering_total_mvr"),
        _money("catering_total_usd"),
        _money("grand_total_mvr"),
        _money("grand_total_usd"),
        _money("amount_due_mvr"),
        _money("amount_due_usd"),

        sa.Column(
            "status",
            sa.Enum(*BOOKING_STATUSES, name="bookingstatus"),
            nullable=False,
            server_default="pending",
        ),
        sa.Column(
            "payment_status",
            sa.Enum(*PAYMENT_STATUSES, name="paymentstatus"),
            nullable=False,
            server_default="pending",
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_bookings_id", "bookings", ["id"])
    op.create_index("ix_bookings_event_date", "bookings", ["event_date"])


def downgrade():
    op.drop_index("ix_bookings_event_date", table_name="bookings")
    op.drop_index("ix_bookings_id", table_name="bookings")
    op.drop_table("bookings")

    bind = op.get_bind()
    for name in ("eventtype", "mealformat", "paymentplan", "bookingstatus", "paymentstatus"):
        sa.Enum(name=name).drop(bind, checkfirst=True)
