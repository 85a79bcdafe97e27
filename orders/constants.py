"""
Delivery location choices offered on the order forms.
"""

SCHOOLS = [
    'University of Zambia (UNZA)',
    'Cavendish University',
    'University of Lusaka (UNILUS)',
    'Zambia ICT College',
    'National Institute of Public Administration (NIPA)',
    'Evelyn Hone College',
    'Apex Medical University',
    'Zambia Institute of Chartered Accountants (ZICA)',
    'DMI-St. Eugene University',
    'Lusaka Business and Technical College',
    'Other',
]

AREAS = [
    'Avondale', 'Buckley', 'Chaisa', 'Chakunkula', 'Chamba Valley', 'Chainda',
    'Chalala', 'Chawama', 'Chelston', 'Chibombo', 'Chilenje', 'Chingwere',
    'Chunga', 'Citra', 'Emmasdale', 'Fairview', 'Garden', 'Handsworth',
    'Ibex Hill', 'Industrial Area', 'Kabulonga', 'Kalingalinga', 'Kalundu',
    'Kamanga', 'Kamwala', 'Kanyama', 'Kaunda Square', 'Kayope', 'Leopards Hill',
    'Libala', 'Lilayi', 'Longacres', 'Lusaka West', 'Makeni', 'Mandevu',
    'Matero', 'Meanwood', 'Mtendere', 'Munali', 'Mutendere', 'Mwembeshi',
    'Ngombe', 'Northmead', 'Nyumba Yanga', 'Olympia', 'PHI', 'Presidential',
    'Rhodes Park', 'Roma', 'Salama Park', 'Silverest', 'State Lodge',
    'Thornpark', 'Tigwilizane', 'Twin Palm', 'Villa Elizabetha', 'Woodlands',
    'Other',
]

SCHOOL = 'school'
OFF_CAMPUS = 'off-campus'

SCHOOL_ADDRESS_FIELDS = ('school', 'block', 'room')
OFF_CAMPUS_ADDRESS_FIELDS = ('area', 'street', 'house_number')
