from sqlalchemy import Boolean, Column, Date, ForeignKey, Integer, Table, Text, UniqueConstraint, text

from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()
metadata = Base.metadata


t_branch_vaccines = Table(
    'branch_vaccines', metadata,
    Column('branch_code', ForeignKey('branches.code', ondelete='CASCADE'), primary_key=True),
    Column('vaccine_code', ForeignKey('vaccines.code', ondelete='CASCADE'), primary_key=True),
)


class Vaccines(Base):
    __tablename__ = 'vaccines'

    code = Column(Text, primary_key=True)
    name = Column(Text, nullable=False)
    description = Column(Text)

    branches = relationship('Branches', secondary=t_branch_vaccines, back_populates='vaccines')


class Branches(Base):
    __tablename__ = 'branches'

    code = Column(Text, primary_key=True)
    name = Column(Text, nullable=False)

    vaccines = relationship(
        'Vaccines',
        secondary=t_branch_vaccines,
        back_populates='branches',
        order_by='Vaccines.code',
    )
    schedules = relationship('VaccinationSchedules', back_populates='branch')


class TimeSlots(Base):
    __tablename__ = 'time_slots'

    id = Column(Integer, primary_key=True)
    start_time = Column(Text, nullable=False)  # "HH:MM"
    end_time = Column(Text, nullable=False)    # "HH:MM"

    schedules = relationship('VaccinationSchedules', back_populates='time_slot')


class PaymentMethods(Base):
    __tablename__ = 'payment_methods'

    id = Column(Integer, primary_key=True)
    name = Column(Text, nullable=False)

    schedules = relationship('VaccinationSchedules', back_populates='payment_method')


class Customers(Base):
    __tablename__ = 'customers'

    id = Column(Integer, primary_key=True)
    name = Column(Text, nullable=False)
    national_number = Column(Text, nullable=False)
    email = Column(Text, nullable=False)
    created_at = Column(Text, server_default=text('CURRENT_TIMESTAMP'))

    schedules = relationship('VaccinationSchedules', back_populates='customer')


class VaccinationSchedules(Base):
    __tablename__ = 'vaccination_schedules'
    __table_args__ = (
        # One booking per branch, day and slot
        UniqueConstraint('branch_code', 'schedule_date', 'time_slot_id'),
    )

    id = Column(Integer, primary_key=True)
    code = Column(Text, nullable=False, unique=True)
    schedule_date = Column(Date, nullable=False)
    time_slot_id = Column(ForeignKey('time_slots.id'), nullable=False)
    branch_code = Column(ForeignKey('branches.code'), nullable=False)
    vaccine_code = Column(ForeignKey('vaccines.code'), nullable=False)
    customer_id = Column(ForeignKey('customers.id'), nullable=False)
    payment_method_id = Column(ForeignKey('payment_methods.id'), nullable=False)
    confirmed = Column(Boolean, nullable=False, server_default=text('0'))
    applied = Column(Boolean, nullable=False, server_default=text('0'))
    created_at = Column(Text, server_default=text('CURRENT_TIMESTAMP'))

    time_slot = relationship('TimeSlots', back_populates='schedules')
    branch = relationship('Branches', back_populates='schedules')
    vaccine = relationship('Vaccines')
    customer = relationship('Customers', back_populates='schedules')
    payment_method = relationship('PaymentMethods', back_populates='schedules')

    @classmethod
    def create(
        cls,
        *,
        code: str,
        schedule_date,
        time_slot: TimeSlots,
        branch: Branches,
        vaccine: Vaccines,
        customer: Customers,
        payment_method: PaymentMethods,
    ) -> "VaccinationSchedules":
        """Build a new, unconfirmed and not yet applied schedule."""
        if not code:
            raise ValueError("Schedule code must not be empty")
        if schedule_date is None:
            raise ValueError("Schedule date is required")

        return cls(
            code=code,
            schedule_date=schedule_date,
            time_slot=time_slot,
            branch=branch,
            vaccine=vaccine,
            customer=customer,
            payment_method=payment_method,
            confirmed=False,
            applied=False,
        )
